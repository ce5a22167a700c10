"""
Team display colors.
Jolpica carries no team colors, so they are mapped here by constructor name.
"""
from typing import Dict, Optional

DEFAULT_TEAM_COLOR = "000000"

# Insertion order matters: the substring fallback returns the first key found in the name
TEAM_COLORS: Dict[str, str] = {
    "Red Bull": "3671C6",
    "Mercedes": "27F4D2",
    "Ferrari": "E80020",
    "McLaren": "FF8000",
    "Aston Martin": "229971",
    "Alpine": "0093CC",
    "Williams": "64C4FF",
    "RB": "6692FF",
    "Kick Sauber": "52E252",
    "Haas": "B6BABD",
    "Haas F1 Team": "B6BABD",
}


def resolve_team_color(team_name: Optional[str]) -> str:
    """
    Resolve a team's hex color (no leading '#').
    Exact match first, then the first known team contained in the name, e.g.
    "Scuderia Ferrari" -> Ferrari. Unknown teams get DEFAULT_TEAM_COLOR.
    """
    if not team_name:
        return DEFAULT_TEAM_COLOR
    if team_name in TEAM_COLORS:
        return TEAM_COLORS[team_name]
    for known_team, color in TEAM_COLORS.items():
        if known_team in team_name:
            return color
    return DEFAULT_TEAM_COLOR
