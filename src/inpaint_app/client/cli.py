"""
Cliente de línea de comandos

Usa el controlador de envío igual que lo haría la interfaz web: elige los
ficheros de imagen y máscara, fija prompt y dimensiones, envía al proxy y
guarda el resultado como inpainted-image.png.

Uso:
    inpaint-client --image a.png --mask b.png --text "cat sitting on a bench"
"""

import argparse
import logging

from inpaint_app.client.controller import SubmissionController, SubmissionState
from inpaint_app.client.uploads import IMAGE_SLOT, MASK_SLOT, path_selector
from inpaint_app.config import DEFAULT_DIMENSION, DEFAULT_PROXY_URL

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send an image inpainting request")
    parser.add_argument("--image", help="Source image file")
    parser.add_argument("--mask", help="Mask image file")
    parser.add_argument("--text", default="", help="What to generate in the masked area")
    parser.add_argument("--width", default=DEFAULT_DIMENSION)
    parser.add_argument("--height", default=DEFAULT_DIMENSION)
    parser.add_argument("--proxy-url", default=DEFAULT_PROXY_URL)
    parser.add_argument("--output-dir", default=".", help="Where to save the result")
    parser.add_argument("--timeout", type=float, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    controller = SubmissionController(proxy_url=args.proxy_url, timeout=args.timeout)
    try:
        controller.select_file(IMAGE_SLOT, path_selector(args.image))
        controller.select_file(MASK_SLOT, path_selector(args.mask))
    except OSError as e:
        logger.error("Could not read input file: %s", e)
        return 1
    controller.set_prompt(args.text)
    controller.set_dimensions(args.width, args.height)

    controller.submit()
    if controller.state is not SubmissionState.SUCCEEDED:
        return 1

    saved = controller.download(args.output_dir)
    logger.info("Saved %s", saved)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
