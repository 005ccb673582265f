"""Post-parse views over Reports: review, aggregation, export."""
