"""
Command-line interfaces for the FHIR JSON validator.
"""
