"""Testing – in-memory doubles for the DevCycle client ports."""
