import argparse
import logging
import sys
from pathlib import Path

from touchup_editor.core.image_handler import load_image_with_alpha, save_png_bytes
from touchup_editor.utils.config import AppConfig
from touchup_editor.utils.helpers import human_readable_size

EXIT_SAVED = 0
EXIT_FAILED = 1
EXIT_CANCELLED = 2


def default_output_path(input_path: Path) -> Path:
    return input_path.with_name(f"{input_path.stem}_edited.png")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="touchup-editor",
        description="Hand-edit an image: brush, eraser, bucket fill and color picker with undo.",
    )
    parser.add_argument("input", help="Image to edit (PNG, JPEG, WEBP, ...)")
    parser.add_argument("-o", "--output", help="Where to write the edited PNG (default: <input>_edited.png)")
    parser.add_argument("--config", help="Settings file (default: ~/.touchup_editor_config.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else default_output_path(input_path)
    try:
        image = load_image_with_alpha(input_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: Failed to load image: {e}")
        return EXIT_FAILED

    config = AppConfig(Path(args.config)) if args.config else AppConfig()
    config.add_recent(input_path)
    outcome = {"code": EXIT_CANCELLED}

    def on_save(data: bytes):
        try:
            save_png_bytes(data, output_path)
        except OSError as e:
            print(f"Error: Failed to save PNG: {e}")
            outcome["code"] = EXIT_FAILED
            return
        print(f"Saved: {output_path} ({human_readable_size(len(data))})")
        outcome["code"] = EXIT_SAVED

    def on_cancel():
        print("Cancelled, nothing written.")
        outcome["code"] = EXIT_CANCELLED

    # Tk is only needed once there is something to edit.
    from touchup_editor.gui.main_window import run_app

    run_app(image, on_save, on_cancel, config=config, title=f"Hand Edit - {input_path.name}")
    return outcome["code"]


if __name__ == "__main__":
    sys.exit(main())
