"""Multi-fund portfolio projection with a capital-gains exemption carryover."""
