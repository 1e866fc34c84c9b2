from typing import List, Sequence, TypeVar

T = TypeVar('T')

# Maximum identifiers accepted per call by the ECS batch APIs
TASK_DEFINITION_CHUNK_SIZE = 10
DESCRIBE_CLUSTERS_CHUNK_SIZE = 100
DESCRIBE_SERVICES_CHUNK_SIZE = 10


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into consecutive groups of at most ``size`` elements.

    Every item lands in exactly one group and group order follows the input,
    so ``sum(chunked(items, n), []) == list(items)``.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")
    items = list(items)
    return [items[i:i + size] for i in range(0, len(items), size)]
