#!/usr/bin/env python3
"""Example: Upscale every image in a directory concurrently."""

import asyncio
import sys
from pathlib import Path

from microjpeg import ApiError, AsyncMicroJpegClient, EnhanceOptions

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}


async def enhance_one(client, semaphore, path, output_dir, options):
    async with semaphore:
        try:
            result = await client.enhance(path, options)
        except ApiError as e:
            return path, f"failed: {e.error_code}"
        await client.download_to_file(result, output_dir / path.name)
        dims = result.result.new_dimensions
        return path, f"{dims.width}x{dims.height}"


async def main():
    if len(sys.argv) < 3:
        print("Usage: python batch_enhance.py <input_dir> <output_dir> [scale]")
        sys.exit(1)

    input_dir = Path(sys.argv[1])
    output_dir = Path(sys.argv[2])
    scale = int(sys.argv[3]) if len(sys.argv) > 3 else 2
    output_dir.mkdir(parents=True, exist_ok=True)

    images = sorted(p for p in input_dir.iterdir() if p.suffix.lower() in IMAGE_EXTENSIONS)
    options = EnhanceOptions(scale=scale)
    semaphore = asyncio.Semaphore(4)

    async with AsyncMicroJpegClient() as client:
        results = await asyncio.gather(
            *(enhance_one(client, semaphore, p, output_dir, options) for p in images)
        )

    for path, status in results:
        print(f"{path.name}: {status}")


if __name__ == "__main__":
    asyncio.run(main())
