#!/usr/bin/env python3
"""
Hello numdump - Your first program

This example demonstrates the basic usage of numdump:
- Array creation from a size or a sequence
- 1-based element access
- Dumping an array, or a sequence directly, to a binary file
- Reading the file back

Run: python examples/hello_numdump.py [output-dir]
"""

import logging
import sys
import tempfile
from pathlib import Path

import numpy as np

import numdump


def main(outdir):
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    numdump.configure(log_level="DEBUG")

    # Step 1: Create arrays
    print("=== Array Creation ===")
    a = numdump.new(5)
    print(f"new(5): {a}")

    b = numdump.new([1.5, 2.5, 3.5])
    print(f"new([1.5, 2.5, 3.5]): {b}")
    print(f"size(b) = {numdump.size(b)}")
    print()

    # Step 2: Element access (indices start at 1)
    print("=== Element Access ===")
    for i in range(1, numdump.size(a) + 1):
        numdump.set(a, i, i * 0.5)
    print(f"after set: {a}")
    print(f"get(a, 1) = {numdump.get(a, 1)}")
    print(f"get(a, 5) = {numdump.get(a, 5)}")
    try:
        numdump.get(a, 0)
    except numdump.IndexOutOfRange as exc:
        print(f"get(a, 0) -> {exc}")
    print()

    # Step 3: Dump
    print("=== Dump ===")
    array_path = outdir / "array.bin"
    direct_path = outdir / "direct.bin"
    numdump.dump(b, array_path)
    numdump.dump([1.5, 2.5, 3.5], direct_path)
    print(f"{array_path.name}: {array_path.stat().st_size} bytes")
    print(f"{direct_path.name}: {direct_path.stat().st_size} bytes")
    print(f"identical: {array_path.read_bytes() == direct_path.read_bytes()}")
    print()

    # Step 4: Read back
    print("=== Read Back ===")
    print(f"numpy.fromfile: {np.fromfile(str(array_path), dtype=np.float32)}")
    print(f"numdump.load:   {numdump.load(array_path)}")
    print()

    print("Success! numdump is working correctly.")


if __name__ == "__main__":
    if len(sys.argv) > 1:
        main(Path(sys.argv[1]))
    else:
        with tempfile.TemporaryDirectory() as tmp:
            main(Path(tmp))
