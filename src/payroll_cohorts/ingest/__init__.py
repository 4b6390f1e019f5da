"""Source readers for yearly payroll tables."""
