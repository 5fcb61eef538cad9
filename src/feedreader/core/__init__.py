"""核心业务逻辑."""

from feedreader.core.gate import AccessGate, get_gate
from feedreader.core.seeder import SeedData, Seeder, default_seed_data
from feedreader.core.service import ReadingService

__all__ = [
    "AccessGate",
    "ReadingService",
    "SeedData",
    "Seeder",
    "default_seed_data",
    "get_gate",
]
