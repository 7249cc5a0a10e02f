"""Movie Explorer discovery service: director and studio based movie discovery."""
