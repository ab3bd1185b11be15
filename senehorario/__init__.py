"""
Senehorario: conflict-free weekly schedules from catalog course sections.
"""

from senehorario.generator import InvalidInput, generate_schedules, validate_candidates

__all__ = ["InvalidInput", "generate_schedules", "validate_candidates"]
