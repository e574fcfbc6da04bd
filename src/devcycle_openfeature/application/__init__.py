"""Application layer – evaluation contract ports and the DevCycle provider."""
