"""Identity services: error taxonomy, token issuance and account workflows."""
