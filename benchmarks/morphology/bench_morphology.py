"""Benchmarks for morphology filters.

This module benchmarks torchmorph erosion, dilation and the closing/opening
composites on image surfaces, and the cost of in-place and region-limited
application relative to copy application.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import numpy as np
import torch

# torchmorph imports
from torchmorph.morphology import Closing, Dilation, Erosion, Opening, square
from torchmorph.surface import PixelFormat, UnmanagedImage


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 3,
    iterations: int = 10,
    **kwargs: Any,
) -> dict[str, float]:
    """Run a simple benchmark on a function.

    Parameters
    ----------
    func : callable
        Function to benchmark.
    *args : Any
        Positional arguments to pass to func.
    warmup : int, optional
        Number of warmup iterations. Default is 3.
    iterations : int, optional
        Number of timed iterations. Default is 10.
    **kwargs : Any
        Keyword arguments to pass to func.

    Returns
    -------
    dict
        Dictionary with 'mean', 'std', 'min' and 'max' times in seconds.
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        times.append(time.perf_counter() - start)

    return {
        "mean": np.mean(times),
        "std": np.std(times),
        "min": np.min(times),
        "max": np.max(times),
    }


def format_time(seconds: float) -> str:
    """Format time in appropriate units."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}us"
    elif seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    else:
        return f"{seconds:.3f}s"


def print_result(name: str, ts_time: dict[str, float]) -> None:
    """Print benchmark result."""
    print(f"\n{name}")
    print("-" * len(name))
    print(
        f"  Time: {format_time(ts_time['mean'])} +/- {format_time(ts_time['std'])}"
    )


def random_image(
    width: int,
    height: int,
    pixel_format: PixelFormat,
    seed: int = 0,
) -> UnmanagedImage:
    """Unmanaged image filled with uniformly random samples."""
    generator = torch.Generator().manual_seed(seed)
    samples = torch.randint(
        0,
        pixel_format.max_value + 1,
        (height, width, pixel_format.channels),
        generator=generator,
        dtype=torch.int32,
    )
    return UnmanagedImage.from_tensor(samples, pixel_format)


class BenchMorphology:
    """Benchmark suite for morphology filters."""

    def __init__(self, warmup: int = 3, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def _run(self, name: str, func: Callable, *args: Any, **kwargs: Any) -> None:
        result = benchmark(
            func,
            *args,
            warmup=self.warmup,
            iterations=self.iterations,
            **kwargs,
        )
        print_result(name, result)

    def bench_primitive(
        self,
        size: int = 512,
        element_size: int = 3,
        pixel_format: PixelFormat = PixelFormat.GRAY8,
    ) -> None:
        image = random_image(size, size, pixel_format)
        for filter_class in (Erosion, Dilation):
            self._run(
                f"{filter_class.__name__} {size}x{size} {pixel_format.name}, "
                f"{element_size}x{element_size}",
                filter_class(square(element_size)).apply,
                image,
            )

    def bench_composite(self, size: int = 512) -> None:
        image = random_image(size, size, PixelFormat.RGB24)
        for filter_class in (Closing, Opening):
            self._run(
                f"{filter_class.__name__} {size}x{size} RGB24",
                filter_class().apply,
                image,
            )

    def bench_in_place(self, size: int = 512) -> None:
        image = random_image(size, size, PixelFormat.GRAY8)
        erosion = Erosion()
        self._run(f"Erosion copy {size}x{size}", erosion.apply, image)
        self._run(
            f"Erosion in place {size}x{size}", erosion.apply_in_place, image
        )
        self._run(
            f"Erosion in place, quarter region {size}x{size}",
            erosion.apply_in_place,
            image,
            (size // 4, size // 4, size // 2, size // 2),
        )

    def run_all(self) -> None:
        """Run all benchmarks."""
        print("=" * 60)
        print("MORPHOLOGY BENCHMARKS")
        print("=" * 60)

        print("\n--- Primitive Filters ---")
        self.bench_primitive()
        self.bench_primitive(pixel_format=PixelFormat.RGBA64)

        print("\n--- Composite Filters ---")
        self.bench_composite()

        print("\n--- In-place and Region ---")
        self.bench_in_place()

    def run_scaling(self) -> None:
        """Run scaling benchmarks with varying parameters."""
        print("=" * 60)
        print("SCALING BENCHMARKS")
        print("=" * 60)

        print("\n--- Image Size Scaling (3x3) ---")
        for size in [128, 256, 512, 1024]:
            self.bench_primitive(size=size)

        # O(S^2) in the element side
        print("\n--- Element Size Scaling (512x512) ---")
        for element_size in [3, 5, 9, 15]:
            self.bench_primitive(element_size=element_size)


if __name__ == "__main__":
    bench = BenchMorphology(warmup=3, iterations=10)
    bench.run_all()
    print("\n")
    bench.run_scaling()
