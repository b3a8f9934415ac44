"""Random number sources used by the signal generators."""
import logging
from typing import Optional, Protocol, Tuple, Union

from numpy import ndarray
import numpy as np

logger = logging.getLogger(__name__)

Size = Optional[Union[int, Tuple[int, ...]]]


class RandomSource(Protocol):
    """A source of random numbers.

    A python protocol (`PEP-544 <https://peps.python.org/pep-0544/>`_) works in
    a similar way to an abstract class. :class:`numpy.random.Generator` already
    implements this protocol, so any instance returned by
    :func:`numpy.random.default_rng` can be used directly.
    """

    def random(self, size: Size = None) -> Union[float, ndarray]:
        """Draw from the uniform distribution over `[0, 1)`.

        Args:
            size: The output shape. A single float is returned if None.
        """
        ...

    def normal(
        self, loc: float = 0.0, scale: float = 1.0, size: Size = None
    ) -> Union[float, ndarray]:
        """Draw from a normal distribution with mean `loc` and std `scale`."""
        ...


def make_random_source(random_seed: Optional[int] = None) -> RandomSource:
    """Create the default random source.

    Args:
        random_seed: The random seed to use. Use a fixed seed
            for reproducible results. If None, fresh entropy is pulled
            from the operating system.

    Returns:
        A seeded random source.
    """
    if random_seed is not None:
        logger.info(f"Using random seed '{random_seed}'")
    return np.random.default_rng(random_seed)
