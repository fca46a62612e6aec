from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'path_cells': 0,
        'filled_cells': 0,
        'open_cells': 0,
        'fallback_used': False,
        'runtime_ms': 0.0,
    }
