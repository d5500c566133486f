"""Great-circle distance between airports."""

from haversine import haversine, Unit

from qcalc.models import Airport


class DistanceCalculator:
    """Calculate great-circle distances between airports."""

    def miles(self, origin: Airport, dest: Airport) -> int:
        """Return great-circle distance in whole miles between two airports.

        Returns 0 if origin and dest are the same airport.
        """
        if origin.iata.upper() == dest.iata.upper():
            return 0

        return round(haversine(origin.coordinates, dest.coordinates, unit=Unit.MILES))


_calculator = DistanceCalculator()


def calc_distance(from_airport: Airport, to_airport: Airport) -> int:
    """Default distance function used by distance-banded rules."""
    return _calculator.miles(from_airport, to_airport)
