from dataclasses import dataclass

@dataclass(frozen=True)
class GenerationConfig:
    # Cellular automata
    smoothing_passes: int = 4
    solid_threshold: int = 4       # SOLID iff solid neighbours > threshold
    min_fill: float = 0.20         # seeding probability at density 0.0
    max_fill: float = 0.65         # seeding probability at density 1.0

    # Door corridors (cells wide, centred on the side midpoint)
    corridor_width: int = 3

    # NoReachableSpawn retry policy
    max_attempts: int = 3
    density_step: float = 0.15

    # Pixel space
    tile_width: int = 32
    tile_height: int = 32

    # Cells between the interior edge and an entering entity
    entry_inset: int = 1

    def fill_probability(self, density: float) -> float:
        return self.min_fill + density * (self.max_fill - self.min_fill)

# Shared defaults (swap with dataclasses.replace for experiments)
DEFAULTS = GenerationConfig()
