from app.models.aggregate import AggregateDocument, AggregateKind  # noqa: F401
