"""HTTP layer: request validation, response envelope and versioned blueprints."""
