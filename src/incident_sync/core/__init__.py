"""Domain records and the ports the synchronization engine depends on."""
