import random
from collections import abc
from typing import AbstractSet, List, Optional, Sequence, TypeVar, Union

from maze_carver.core.errors import EmptyCollectionError

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Returns a uniformly permuted copy of 'items'.
    random.shuffle is Fisher-Yates, so every permutation is equally likely.
    """
    rng = rng or random
    result = list(items)
    rng.shuffle(result)
    return result


def random_member(group: Union[AbstractSet[T], Sequence[T]], rng: Optional[random.Random] = None) -> T:
    """
    Picks one element of a set or sequence with uniform probability.
    Raises EmptyCollectionError if there is nothing to pick from.
    """
    if len(group) == 0:
        raise EmptyCollectionError("empty group")

    rng = rng or random
    # Sets have no indexing; materialize in iteration order
    items = list(group) if isinstance(group, abc.Set) else group
    return items[rng.randrange(len(items))]
