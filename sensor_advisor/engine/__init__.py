"""
Advisory engine: classifies readings and turns a snapshot into ranked
care advisories and plant suggestions.

Modules
-------
classifier  : ThresholdBand + THRESHOLDS + classify() + classify_snapshot()
              - pure functions, no I/O.
rules       : AdvisoryRule / PlantRule dataclasses and the ordered rule tables.
recommender : recommend() + suitable_plants() - rule evaluation.
"""
