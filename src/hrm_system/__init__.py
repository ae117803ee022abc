"""HRM system: time ledger, task log, comp leaves, payroll and audit trail."""
