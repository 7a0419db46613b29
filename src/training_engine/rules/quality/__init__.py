"""Quality sessions: tempo, threshold, VO2max and fartlek."""
