"""Aggregation over normalized payroll records.

This package contains the statistics helper (`stats`), the target-year
cohort partitioner (`partition`) and the year-over-year pay change
calculator (`pay_change`).
"""
