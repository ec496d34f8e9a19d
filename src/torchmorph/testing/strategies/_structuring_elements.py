import hypothesis.strategies
import torch

from torchmorph.morphology import StructuringElement


@hypothesis.strategies.composite
def structuring_elements(
    draw: hypothesis.strategies.DrawFn,
    max_size: int = 5,
) -> StructuringElement:
    """Strategy for random non-empty odd-sized structuring elements."""
    size = draw(
        hypothesis.strategies.sampled_from(list(range(1, max_size + 1, 2)))
    )
    cells = draw(
        hypothesis.strategies.lists(
            hypothesis.strategies.booleans(),
            min_size=size * size,
            max_size=size * size,
        ).filter(any)
    )
    return StructuringElement(torch.tensor(cells).reshape(size, size))
