import random
from dataclasses import dataclass
from typing import Optional

A = 16807
M = 0x7FFFFFFF  # 2^31-1

def pm_next(state: int) -> int:
    return (state * A) % M

def normalize_seed(seed: int) -> int:
    """Fold any integer into the valid Park–Miller state range 1..M-1."""
    return (seed % (M - 1)) + 1

@dataclass
class PMRandom:
    state: int

    @classmethod
    def from_seed(cls, seed: Optional[int] = None) -> "PMRandom":
        # None => fresh generator; explicit seeds reproduce across runs
        if seed is None:
            seed = random.SystemRandom().randrange(M)
        return cls(normalize_seed(seed))

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return (self.next32() - 1) / (M - 1)

    def chance(self, p: float) -> bool:
        return self.random() < p
