"""Systems - infrastructure the simulation core plugs into."""
