"""
sensor_advisor.ingestion - Reading snapshot input.

Snapshot producers (simulation, hardware link, manual form) live outside this
package; it only turns their JSON output into validated ``ReadingSnapshot``
objects.

Modules:
  snapshot - load_snapshot() + snapshot_from_mapping().
"""
