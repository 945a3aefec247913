"""scenes — pygame views over the RunController (no simulation logic)."""
