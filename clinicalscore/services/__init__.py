"""Services for the clinical calculators.

- risk_table: SCORE2 cardiovascular risk lookup and arithmetic
- scoring: one scoring strategy per calculator type
- catalog: declarative calculator configuration
- validation: answer range and eligibility checks
- framework: per-session calculator state machine
- submission: best-effort remote result log
- export: JSON and text rendering of results
- sessions: in-memory session registry
"""
