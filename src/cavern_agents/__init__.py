"""Hunt-and-scram cavern agents."""
