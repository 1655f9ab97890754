"""
sensor_advisor.reporting - CLI formatting and report export.

Modules:
  formatters - ASCII terminal formatters for Typer CLI commands.
  export     - build_report() + write_report_json().
"""
