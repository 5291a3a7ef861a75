"""
Username pools for the simulated leaderboard.

Contains the standard pool of fictional rival handles, plus a short
pool used for compact demos.
"""

from typing import Dict, List


# Standard pool of fictional rival handles
STANDARD_NAMES = [
    "NeonDrifter", "PixelPhantom", "ByteRunner", "GlitchQueen", "VoidHopper",
    "SynthWave99", "ChromeFox", "LaserLynx", "QuantumKid", "RetroRaptor",
    "CyberSloth", "TurboNova", "HexBouncer", "NightCircuit", "StaticStorm",
    "MegaMochi", "BitCrusher", "AstroPogo", "FluxRider", "ZeroGravZed",
    "DataDasher", "OrbitOwl", "PulseJumper", "VectorVixen", "LagSlayer",
    "ShadowSprite", "IonSkipper", "BlazeBinary", "CometKat", "EchoLeap",
    "FrostPixel", "GammaGecko", "HyperHop", "JoltJunkie", "KiloKnight",
    "LunarLoop", "MatrixMango", "NovaNoodle", "OctoBounce", "PrismPanda",
]

# Short pool for compact demos and tests
SHORT_NAMES = [
    "Ace", "Bolt", "Cleo", "Dash", "Echo", "Fizz",
]

NAME_LISTS: Dict[str, List[str]] = {
    "standard": STANDARD_NAMES,
    "short": SHORT_NAMES,
}


def get_name_pool(list_type: str = "standard") -> List[str]:
    """
    Get a username pool by name.

    Args:
        list_type: "standard" or "short"

    Returns:
        List of usernames (a copy; callers may not mutate the shared pool)
    """
    if list_type not in NAME_LISTS:
        raise ValueError(f"Unknown name list type: {list_type}")
    return list(NAME_LISTS[list_type])
