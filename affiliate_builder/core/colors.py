"""
Couleurs de marque — conversions hex et variantes dérivées (primary_dark).
"""
import re

_HEX = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def normalize_hex(hex_color: str, fallback: str = "#2563eb") -> str:
    """'#ABC' / 'aabbcc' → '#aabbcc'. Valeur invalide → fallback."""
    m = _HEX.match((hex_color or "").strip())
    if not m:
        return fallback
    digits = m.group(1).lower()
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convertit #RRGGBB en (R, G, B)."""
    hex_color = normalize_hex(hex_color).lstrip("#")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def darken(hex_color: str, percent: int = 15) -> str:
    """Assombrit de `percent` % (primary_dark = primaire assombrie de 15 %)."""
    factor = 1 - percent / 100
    return "#" + "".join(f"{max(0, int(c * factor)):02x}" for c in hex_to_rgb(hex_color))
