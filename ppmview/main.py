"""Точка входа в приложение: разбор аргументов, загрузка файла, запуск окна."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from ppmview.models.decode_options import DecodeOptions, FlushPolicy
from ppmview.models.errors import PpmFormatError
from ppmview.services.image_service import ImageService

logger = logging.getLogger("ppmview")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ppmview", description="View an ASCII (P3) Portable Pixmap file")
    p.add_argument("path", help="Path to a .ppm file")
    p.add_argument(
        "--flush-policy",
        choices=[policy.value for policy in FlushPolicy],
        default=FlushPolicy.END_OF_DATA.value,
        help="When an incomplete RGB triplet becomes a pixel: once at end of data, or at every line end (legacy)",
    )
    p.add_argument("--rescale", action="store_true", help="Scale samples from 0..maxval to 0..255")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Загружает файл и запускает главное окно; возвращает код завершения процесса."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = DecodeOptions(flush_policy=FlushPolicy(args.flush_policy), rescale=args.rescale)
    service = ImageService(options)
    try:
        image_data = service.load_image(args.path)
    except PpmFormatError as exc:
        logger.error("%s is not a valid P3 file: %s", args.path, exc)
        return 1
    except OSError as exc:
        logger.error("Could not read %s: %s", args.path, exc)
        return 1

    # the window is only built for a successfully decoded image
    from ppmview.app import PpmViewerApp

    app = PpmViewerApp(image_data, service)
    app.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
