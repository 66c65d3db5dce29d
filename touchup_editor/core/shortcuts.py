import logging

logger = logging.getLogger(__name__)


class ShortcutSubscription:
    """
    Application-wide key binding that lives only as long as its owner.

    `host` is anything with Tk's bind_all(sequence, func) / unbind_all(sequence)
    pair, normally the Tk root.
    """

    def __init__(self, host, sequences, callback):
        self.host = host
        self.sequences = tuple(sequences)
        self.callback = callback
        self.attached = False

    def _fire(self, event=None):
        self.callback()
        return "break"

    def attach(self):
        if self.attached:
            return
        for seq in self.sequences:
            self.host.bind_all(seq, self._fire)
        self.attached = True
        logger.info("Bound %s", ", ".join(self.sequences))

    def detach(self):
        if not self.attached:
            return
        for seq in self.sequences:
            self.host.unbind_all(seq)
        self.attached = False
        logger.info("Unbound %s", ", ".join(self.sequences))
