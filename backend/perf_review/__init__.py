"""Performance Review Package — review cycle lifecycle and peer feedback engine.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
