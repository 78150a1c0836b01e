from collections import namedtuple
from enum import Enum

import numpy as np


class ExtremumType(Enum):
    Minimum = 0
    Maximum = 1


Extremum = namedtuple("Extremum", ["Index", "Value", "Type"])


def DetectExtrema(InputData):
    """
    Finds the local minima and maxima of one-dimensional data.

    Samples are compared by their data value first and by their index second.
    Of two equal values, the one with the lower index counts as the lower sample.
    This makes every comparison strict and decides plateaus:
    the leftmost sample of a flat valley is a minimum,
    the rightmost sample of a flat peak is a maximum.
    Flat steps in rising data contain no extrema.
    A flat step in falling data, such as [2, 1, 1, 0], has a minimum at its leftmost
    and a maximum at its rightmost sample. The two are paired with zero persistence.

    A sample is a minimum if it is lower than all of its neighbors.
    The leftmost and rightmost samples have only one neighbor.
    A sample is a maximum if it is higher than both of its neighbors.
    The leftmost and rightmost samples are never maxima.
    Hence, minima and maxima alternate (ordered from lowest to highest index),
    the sequence starts and ends with a minimum,
    and we have an odd number of extrema.

    Data with less than three samples has no extrema.
    The lower sample of such data is the global minimum, but it is not reported here.

    Returns a list of Extremum tuples ordered by index.
    """

    Data = np.asarray(InputData, dtype=np.float64)
    NumElements = len(Data)
    if (NumElements < 3):
        return []

    #~ LowerThanRight[i] compares sample i with sample i+1. Ties go to the left sample.
    #~ LowerThanLeft[i] compares sample i+1 with sample i.
    LowerThanRight = Data[:-1] <= Data[1:]
    LowerThanLeft = Data[1:] < Data[:-1]

    #~ Minima: lower than the existing neighbors
    IsMinimum = np.ones(NumElements, dtype=bool)
    IsMinimum[:-1] &= LowerThanRight
    IsMinimum[1:] &= LowerThanLeft

    #~ Maxima: higher than both neighbors, never at the boundary
    IsMaximum = np.zeros(NumElements, dtype=bool)
    IsMaximum[1:-1] = ~LowerThanLeft[:-1] & ~LowerThanRight[1:]

    Extrema = []
    for idx in np.flatnonzero(IsMinimum | IsMaximum):
        Type = ExtremumType.Minimum if IsMinimum[idx] else ExtremumType.Maximum
        Extrema.append(Extremum(int(idx), float(Data[idx]), Type))

    return Extrema
