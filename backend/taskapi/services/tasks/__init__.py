"""Task use-cases: CRUD plus filtered, paginated listing."""
