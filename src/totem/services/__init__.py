"""Request-scoped services: import reconciliation, summaries and payroll bookkeeping."""
