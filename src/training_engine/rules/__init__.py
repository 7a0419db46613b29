"""Per-workout-type dosage rules, discovered by DosageRegistry."""
