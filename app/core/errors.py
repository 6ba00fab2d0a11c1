"""Erreurs du moteur de métriques"""


class AggregationError(Exception):
    """Lecture ou écriture du store impossible pendant un calcul de métriques."""

    def __init__(self, message: str = "Aggregation failed"):
        super().__init__(message)
        self.message = message
