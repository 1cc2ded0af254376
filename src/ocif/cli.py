import argparse
import sys
from pathlib import Path

from ocif.codec import SUPPORTED_METHODS
from ocif.errors import OCIFError
from ocif.model import DEFAULT_METHOD, Image
from ocif.render import to_png


def describe(image: Image, method: int) -> str:
    characters = {cell.character for cell in image.cells}
    return f"{image.width}x{image.height} cells, method {method}, {len(characters)} distinct characters"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect, convert or render OCIF images")
    parser.add_argument("image", help="Path to input .pic file")
    parser.add_argument(
        "-o", "--output", default=None, help="Write a PNG (if the name ends in .png) or a re-encoded .pic file"
    )
    parser.add_argument("-s", "--scale", type=int, default=1, help="Pixel scale factor for PNG output (default: 1)")
    parser.add_argument(
        "-m",
        "--method",
        type=int,
        default=DEFAULT_METHOD,
        choices=SUPPORTED_METHODS,
        help=f"Encoding method for .pic output (default: {DEFAULT_METHOD})",
    )
    args = parser.parse_args(argv)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        return 1

    try:
        data = image_path.read_bytes()
        image = Image.from_bytes(data)
        if args.output is None:
            print(describe(image, data[4]))
            return 0
        output = Path(args.output)
        if output.suffix.lower() == ".png":
            output.write_bytes(to_png(image, args.scale))
        else:
            image.save(output, args.method)
    except OCIFError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
