"""Pure numeric models: training load, conditions severity, pace adjustment, VDOT."""
