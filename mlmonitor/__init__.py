"""mlmonitor - record model inferences and the human feedback attached to them."""
