from __future__ import annotations

import random
import re
from typing import Optional

PREFIXES = ("turbo", "hyper", "mystic", "ultra", "mega", "cyber", "nano", "quantum", "stellar", "cosmic")
COLORS = ("blue", "cyan", "purple", "magenta", "crimson", "azure", "indigo", "violet", "teal", "cobalt")

_HOSTNAME_RE = re.compile(r"^[A-Za-z0-9-]+$")


def generate_hostname(rng: Optional[random.Random] = None) -> str:
    """e.g. ``CosmicTeal0421``."""
    rng = rng or random.Random()
    return f"{rng.choice(PREFIXES).capitalize()}{rng.choice(COLORS).capitalize()}{rng.randrange(10000):04d}"


def hostname_error(name: str) -> Optional[str]:
    if not name:
        return "Hostname must not be empty"
    if len(name) > 63:
        return f"Hostname {name!r} is longer than 63 characters"
    if not _HOSTNAME_RE.match(name):
        return f"Hostname {name!r} may only contain letters, digits and '-'"
    return None
