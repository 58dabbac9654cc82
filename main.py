"""
JPEG Distortion Simulator
Reproduces JPEG compression artifacts without encoding a bitstream.
"""

import logging
import sys
import warnings

warnings.filterwarnings('ignore', category=RuntimeWarning)

USAGE = """Usage: python main.py <image_path> [quality] [options]
       python main.py --synthetic [quality] [options]

Options:
  --mode MODE     chroma subsampling: 4:4:4, 4:2:2, 4:4:0, 4:2:0 (default 4:2:0)
  --no-quant      subsampling-only distortion (skip quantization)
  --out PATH      output file (default distorted.png)
  --workers N     tile worker threads
  --verbose       debug logging"""


def parse_args(args):
    """Split argv into options; raises ValueError on bad input."""
    options = {
        'source': None,
        'quality': 50,
        'mode': '4:2:0',
        'quantize': True,
        'out': 'distorted.png',
        'workers': None,
        'verbose': False,
    }
    positional = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ('--mode', '--out', '--workers'):
            if i + 1 >= len(args):
                raise ValueError(f"{arg} needs a value")
            value = args[i + 1]
            if arg == '--workers':
                options['workers'] = int(value)
                if options['workers'] < 1:
                    raise ValueError(f"--workers must be at least 1, got {value}")
            else:
                options[arg[2:]] = value
            i += 2
            continue
        if arg == '--no-quant':
            options['quantize'] = False
        elif arg == '--verbose':
            options['verbose'] = True
        else:
            positional.append(arg)
        i += 1

    if not positional:
        raise ValueError("Missing image path or --synthetic")
    options['source'] = positional[0]
    if len(positional) > 1:
        options['quality'] = int(positional[1])
    return options


def run_cli(argv):
    """Distort one image and report quality metrics."""
    from models.distortion_params import DistortionParams
    from engines.pipeline import distort_image
    from utils.test_images import generate_colored_checkerboard
    from utils.image_io import load_image, save_image

    if not argv or argv[0] in ('-h', '--help'):
        print(USAGE)
        return 0

    try:
        options = parse_args(argv)
        params = DistortionParams(
            quality=options['quality'],
            subsampling_mode=options['mode'],
            apply_quantization=options['quantize']
        )
        if options['source'] == '--synthetic':
            print("Generating test image...")
            image = generate_colored_checkerboard(256)
        else:
            print(f"Loading: {options['source']}")
            image = load_image(options['source'])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if options['verbose'] else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print(f"Image: {image.shape[1]}x{image.shape[0]}")
    print(f"Quality: {params.quality}  Mode: {params.subsampling_mode}"
          f"  Quantization: {'on' if params.apply_quantization else 'off'}")

    result = distort_image(image, params, max_workers=options['workers'])

    print("\n=== Results ===")
    print(f"PSNR (Y):  {result.psnr_y:.2f} dB")
    print(f"SSIM (Y):  {result.ssim_y:.4f}")
    print(f"PSNR (RGB):{result.psnr_rgb:.2f} dB")
    print(f"SSIM (RGB):{result.ssim_rgb:.4f}")
    print(f"Time:      {result.elapsed_ms:.2f} ms")

    save_image(result.distorted_image, options['out'])
    print(f"\nSaved: {options['out']}")
    return 0


def main():
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == '__main__':
    main()
