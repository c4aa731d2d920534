#!/usr/bin/env python3
"""Example: Compress a single image and save the result."""

import asyncio
import sys
from pathlib import Path

from microjpeg import ApiError, AsyncMicroJpegClient, CompressOptions


async def main():
    """Demonstrate single image compression."""

    if len(sys.argv) < 2:
        print("Usage: python compress_single.py <image_path> [quality]")
        print("Example: python compress_single.py photo.jpg 75")
        sys.exit(1)

    image_path = Path(sys.argv[1])
    quality = int(sys.argv[2]) if len(sys.argv) > 2 else 80

    if not image_path.exists():
        print(f"Error: Image file not found: {image_path}")
        sys.exit(1)

    # API key comes from MICROJPEG_API_KEY, a .env file or the OS keychain
    async with AsyncMicroJpegClient() as client:
        try:
            print(f"Compressing {image_path.name} at quality {quality}...")
            result = await client.compress(image_path, CompressOptions(quality=quality))

            output_path = image_path.with_suffix(f".min{image_path.suffix}")
            await client.download_to_file(result, output_path)

            info = result.result
            print(f"Saved to: {output_path}")
            print(f"   - Original size: {info.original_size:,} bytes")
            print(f"   - Compressed size: {info.compressed_size:,} bytes")
            print(f"   - Savings: {info.savings_percent:.1f}%")
            print(f"   - Processing time: {info.processing_time} ms")
            print(f"   - Compressions this period: {client.compression_count}")

        except ApiError as e:
            print(f"Compression failed: {e}")
            if e.is_limit_reached:
                print("You have reached your plan's limit.")
            sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
