"""Domain models for locations, employees, sales, labor and payroll."""
