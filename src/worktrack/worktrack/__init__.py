"""WorkTrack: attendance, leave and task tracking for small teams."""
