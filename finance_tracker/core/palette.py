"""
Tag colour palette

New tags without an explicit colour get one picked uniformly from a
fixed palette chosen for contrast on the tag badges.
"""
import random
from typing import Optional

TAG_COLOR_PALETTE = (
    '#dc3545', '#198754', '#0d6efd', '#fd7e14', '#6f42c1', '#20c997',
    '#ffc107', '#e91e63', '#795548', '#607d8b', '#ff5722', '#9c27b0',
    '#2196f3', '#4caf50', '#ff9800', '#9e9e9e', '#673ab7', '#3f51b5',
    '#009688', '#f44336', '#8e24aa', '#5e35b1', '#3949ab', '#1e88e5',
    '#039be5', '#00acc1', '#00897b', '#43a047', '#689f38', '#827717',
    '#afb42b', '#fbc02d', '#ffa000', '#f57c00', '#e64a19', '#d84315',
    '#bf360c', '#6d4c41', '#546e7a', '#455a64', '#37474f', '#263238',
    '#1b5e20', '#0d47a1', '#4a148c', '#880e4f', '#e65100', '#ff6f00',
    '#f57f17', '#33691e', '#1565c0', '#283593', '#7b1fa2', '#c2185b',
    '#ad1457', '#8bc34a', '#cddc39', '#ffeb3b',
)


def pick_tag_color(rng: Optional[random.Random] = None) -> str:
    """Pick a tag colour from the palette"""
    return (rng or random).choice(TAG_COLOR_PALETTE)
