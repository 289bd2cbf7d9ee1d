"""Domain logic for the FHIR JSON validator."""
