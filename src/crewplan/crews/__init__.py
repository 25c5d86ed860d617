# src/crewplan/crews/__init__.py
"""
crewplan.crews
~~~~~~~~~~~~~~

Round-robin crew rotation.  Within a period the k-th task consumed goes to
crew ``"T" + (1 + k mod N)``, so every crew receives one task per round
before any crew receives a second.

Basic usage::

    from crewplan.crews import CrewRotor, crew_label_for

    crew_label_for(4, 3)        # → "T2"

    rotor = CrewRotor(3)
    rotor.take(4)               # → ["T1", "T2", "T3", "T1"]

Batch numbering::

    from crewplan.crews import crew_numbers
    crew_numbers(7, 3)          # → array([1, 2, 3, 1, 2, 3, 1])
"""

from crewplan.crews.rotation import (
    CREW_PREFIX,
    CrewRotor,
    crew_label_for,
    crew_labels,
    crew_numbers,
)

__all__ = [
    "CREW_PREFIX",
    "CrewRotor",
    "crew_label_for",
    "crew_labels",
    "crew_numbers",
]
