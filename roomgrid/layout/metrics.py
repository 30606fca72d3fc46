from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'attempts': 0,
        'resets': 0,
        'steps': 0,
        'rooms_created': 0,
        'doors_opened': 0,
        'rejected_cap': 0,
        'rejected_bounds': 0,
        'rejected_occupied': 0,
        'rejected_branch': 0,
        'rejected_adjacency': 0,
        'unreachable_rooms': 0,
        'runtime_ms': 0.0,
    }
