"""Report assembly and CSV output.

`build_reports` turns partitioned statistics into tables (commands,
rank/tenure breakdown, pay change); `write_reports` writes them to disk.
"""
