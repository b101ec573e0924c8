"""Task workflow service: ordering, sprint transitions, validation, access and moves."""
