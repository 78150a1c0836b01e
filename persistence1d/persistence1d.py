import logging
import sys
from collections import namedtuple
from dataclasses import dataclass

import numpy as np

from .extrema import DetectExtrema, ExtremumType
from .unionfind import UnionFind

logger = logging.getLogger(__name__)

#~ Threshold for queries that keep all paired extrema
NO_FILTERING = 0.0

PairedExtrema = namedtuple("PairedExtrema", ["MinIndex", "MaxIndex", "Persistence"])
GlobalMinimum = namedtuple("GlobalMinimum", ["Index", "Value"])

UNDEFINED_GLOBAL_MINIMUM = GlobalMinimum(-1, 0.0)


@dataclass(frozen=True)
class RunState:
    """Results of one run. Never modified, only replaced by the next run."""

    Data: np.ndarray
    Extrema: tuple
    Pairs: tuple
    GlobalMinimum: GlobalMinimum


def _EmptyState():
    Data = np.zeros(0, dtype=np.float64)
    Data.flags.writeable = False
    return RunState(Data, (), (), UNDEFINED_GLOBAL_MINIMUM)


def _PrepareData(InputData):
    Data = np.array(InputData, dtype=np.float64)
    if (Data.ndim != 1):
        logger.warning("Input has shape %s, handling it as one-dimensional data with %d samples.", Data.shape, Data.size)
        Data = Data.ravel()
    if not np.all(np.isfinite(Data)):
        raise ValueError("InputData must only contain finite values (no NaN or Infinity).")
    Data.flags.writeable = False
    return Data


def _PairExtrema(Data, Extrema):
    """
    Pairs minima and maxima by merging regions in the order of increasing data value.

    A region is a set of neighboring extrema. It is represented by its lowest minimum.
    A minimum starts a new region.
    A maximum joins the two regions to its left and right.
    The region with the higher minimum dies at this maximum:
    the two are paired and their persistence is the difference of their data values.
    The lower minimum survives and represents the merged region.
    The last surviving minimum is the global minimum.
    """

    NumExtrema = len(Extrema)
    Values = np.array([E.Value for E in Extrema], dtype=np.float64)

    #~ Sort extrema in a stable manner to break ties (leftmost index comes first)
    SortedPositions = np.argsort(Values, kind='stable')

    #~ Get a union find data structure over the positions in the extrema list
    UF = UnionFind(NumExtrema)

    Pairs = []
    for Position in SortedPositions:
        Position = int(Position)
        Current = Extrema[Position]

        if (Current.Type == ExtremumType.Minimum):
            UF.MakeSet(Position)
            continue

        #~ A maximum always has a minimum on either side, and both have been visited before
        LeftRoot = UF.Find(Position - 1)
        RightRoot = UF.Find(Position + 1)
        LeftMinimum = UF.Representative[LeftRoot]
        RightMinimum = UF.Representative[RightRoot]

        #~ Positions grow with indices, so comparing (value, position) is the same total order the extrema were detected with
        if ((Values[LeftMinimum], LeftMinimum) < (Values[RightMinimum], RightMinimum)):
            LowestMinimum, HighestMinimum = LeftMinimum, RightMinimum
        else:
            LowestMinimum, HighestMinimum = RightMinimum, LeftMinimum

        UF.ExtendSetByID(LeftRoot, Position)
        UF.Union(LeftRoot, RightRoot, LowestMinimum)

        #~ Record the two paired extrema: index of minimum, index of maximum, persistence value
        MinIndex = Extrema[HighestMinimum].Index
        MaxIndex = Current.Index
        Pairs.append(PairedExtrema(MinIndex, MaxIndex, float(Data[MaxIndex] - Data[MinIndex])))

    logger.debug("UF is left with %d sets.", UF.NumSets)

    GlobalMinimumPosition = UF.GetRepresentative(0)
    Global = Extrema[GlobalMinimumPosition]
    return Pairs, GlobalMinimum(Global.Index, Global.Value)


class Persistence1D(object):
    """
    Finds extrema and their persistence in one-dimensional data.

    Local minima and local maxima are extracted, paired,
    and stored together with their persistence.
    The global minimum is extracted as well. It is not paired.

    We assume a connected one-dimensional domain.
    Think of "data on a line", or a function f(x) over some domain xmin <= x <= xmax.
    We are only concerned with the data values f(x)
    and do not care to know the x positions of these values,
    since this would not change which point is a minimum or maximum.

    Call RunPersistence() once per data set.
    The results of the last run are kept until the next call to RunPersistence()
    and can be queried any number of times using different thresholds.
    Paired extrema are returned sorted by persistence, from least to most persistent.
    Set MatlabIndexing to get all indices shifted by one (1-based indexing).
    """

    def __init__(self):
        self._State = _EmptyState()

    def RunPersistence(self, InputData):
        """
        Computes extrema and persistence of InputData and replaces previous results.

        Empty data is valid and resets all results.
        Raises ValueError if the data contains NaN or Infinity. Previous results are kept in that case.
        """
        Data = _PrepareData(InputData)
        NumElements = len(Data)
        logger.debug("Running Persistence1D on %d samples.", NumElements)

        if (NumElements == 0):
            self._State = _EmptyState()
            return

        Extrema = DetectExtrema(Data)
        if Extrema:
            Pairs, Global = _PairExtrema(Data, Extrema)
        else:
            #~ One or two samples: the lower one is the global minimum
            idxGlobalMinimum = int(np.argmin(Data))
            Pairs, Global = [], GlobalMinimum(idxGlobalMinimum, float(Data[idxGlobalMinimum]))

        Pairs.sort(key=lambda Pair: (Pair.Persistence, Pair.MinIndex))
        logger.debug("Found %d extrema, %d pairs, global minimum at %d with value %g.",
                     len(Extrema), len(Pairs), Global.Index, Global.Value)

        self._State = RunState(Data, tuple(Extrema), tuple(Pairs), Global)

    @staticmethod
    def _CheckThreshold(Threshold):
        if not (Threshold >= 0):
            raise ValueError("Threshold must be >= 0, got %r" % (Threshold,))

    def GetPairedExtrema(self, Threshold=NO_FILTERING, MatlabIndexing=False):
        """
        Returns the pairs with persistence strictly larger than Threshold,
        sorted by persistence (least persistent first).
        """
        self._CheckThreshold(Threshold)
        Offset = 1 if MatlabIndexing else 0
        return [PairedExtrema(P.MinIndex + Offset, P.MaxIndex + Offset, P.Persistence)
                for P in self._State.Pairs if P.Persistence > Threshold]

    def GetAllPairedExtrema(self, MatlabIndexing=False):
        """
        Returns every pair of the last run, including pairs with zero persistence
        (flat steps in descending data), sorted by persistence (least persistent first).
        """
        Offset = 1 if MatlabIndexing else 0
        return [PairedExtrema(P.MinIndex + Offset, P.MaxIndex + Offset, P.Persistence)
                for P in self._State.Pairs]

    def GetExtremaIndices(self, Threshold=NO_FILTERING, MatlabIndexing=False):
        """
        Returns (MinIndices, MaxIndices) of the pairs with persistence strictly larger than Threshold.
        MinIndices[i] and MaxIndices[i] belong to the same pair. The global minimum is not included.
        """
        Pairs = self.GetPairedExtrema(Threshold, MatlabIndexing)
        MinIndices = [P.MinIndex for P in Pairs]
        MaxIndices = [P.MaxIndex for P in Pairs]
        return (MinIndices, MaxIndices)

    def GetExtrema(self, MatlabIndexing=False):
        Offset = 1 if MatlabIndexing else 0
        return [E._replace(Index=E.Index + Offset) for E in self._State.Extrema]

    def GetGlobalMinimumIndex(self, MatlabIndexing=False):
        """Index of the global minimum, or -1 if there is no data. -1 is never shifted."""
        Index = self._State.GlobalMinimum.Index
        if (Index == UNDEFINED_GLOBAL_MINIMUM.Index):
            return Index
        return Index + 1 if MatlabIndexing else Index

    def GetGlobalMinimumValue(self):
        return self._State.GlobalMinimum.Value

    def GetArrays(self, Threshold=NO_FILTERING, MatlabIndexing=False):
        """
        Returns the results as numpy arrays for handing them to other environments:
        (MinIndices, MaxIndices, Persistence, GlobalMinIndex, GlobalMinValue)
        """
        Pairs = self.GetPairedExtrema(Threshold, MatlabIndexing)
        MinIndices = np.array([P.MinIndex for P in Pairs], dtype=np.int64)
        MaxIndices = np.array([P.MaxIndex for P in Pairs], dtype=np.int64)
        Persistence = np.array([P.Persistence for P in Pairs], dtype=np.float64)
        return (MinIndices, MaxIndices, Persistence,
                self.GetGlobalMinimumIndex(MatlabIndexing), self.GetGlobalMinimumValue())

    def VerifyResults(self):
        """
        Runs consistency checks on the results of the last run.
        Returns True if all checks pass. Failed checks are logged.
        """
        State = self._State
        Data = State.Data
        NumElements = len(Data)
        Global = State.GlobalMinimum

        if (NumElements == 0):
            if State.Extrema or State.Pairs or (Global != UNDEFINED_GLOBAL_MINIMUM):
                return self._Fail("empty data must have no extrema, no pairs and an undefined global minimum")
            return True

        if not (0 <= Global.Index < NumElements):
            return self._Fail("global minimum index %d out of range" % Global.Index)
        if (Data[Global.Index] != Global.Value) or (Global.Value != Data.min()):
            return self._Fail("global minimum value %g is not the minimum of the data" % Global.Value)

        Types = dict((E.Index, E.Type) for E in State.Extrema)
        if State.Extrema and (len(State.Pairs) * 2 + 1 != len(State.Extrema)):
            return self._Fail("%d extrema cannot form %d pairs" % (len(State.Extrema), len(State.Pairs)))
        if not State.Extrema and State.Pairs:
            return self._Fail("pairs without extrema")

        UsedIndices = set([Global.Index])
        for P in State.Pairs:
            if not (0 <= P.MinIndex < NumElements and 0 <= P.MaxIndex < NumElements):
                return self._Fail("pair %s references indices out of range" % (P,))
            if (Types.get(P.MinIndex) != ExtremumType.Minimum) or (Types.get(P.MaxIndex) != ExtremumType.Maximum):
                return self._Fail("pair %s does not pair a minimum with a maximum" % (P,))
            if (P.MinIndex in UsedIndices) or (P.MaxIndex in UsedIndices):
                return self._Fail("pair %s reuses an index" % (P,))
            UsedIndices.add(P.MinIndex)
            UsedIndices.add(P.MaxIndex)
            if (P.Persistence < 0) or (P.Persistence != abs(Data[P.MaxIndex] - Data[P.MinIndex])):
                return self._Fail("pair %s has wrong persistence" % (P,))

        return True

    @staticmethod
    def _Fail(Reason):
        logger.warning("Persistence1D results failed verification: %s", Reason)
        return False

    def PrintResults(self, Threshold=NO_FILTERING, File=None):
        """
        Prints the pairs with persistence larger than Threshold (least persistent first),
        followed by the global minimum, which is always printed.
        """
        if File is None:
            File = sys.stdout
        Data = self._State.Data
        for P in self.GetPairedExtrema(Threshold):
            print("Minimum at index %d with persistence %g and data value %g" % (P.MinIndex, P.Persistence, Data[P.MinIndex]), file=File)
            print("Maximum at index %d with persistence %g and data value %g" % (P.MaxIndex, P.Persistence, Data[P.MaxIndex]), file=File)
        print("Global minimum at index %d with data value %g" % (self.GetGlobalMinimumIndex(), self.GetGlobalMinimumValue()), file=File)


def RunPersistence(InputData):
    """
    Finds extrema and their persistence in one-dimensional data,
    returned as a flat list of (index, persistence) tuples.

    Entries at even positions are minima, entries at odd positions are maxima.
    The minimum at 2*i is paired with the maximum at 2*i+1.
    Pairs are sorted by persistence, least persistent first.
    The last entry of the list is the global minimum with infinite persistence.
    It is not paired with a maximum.
    Hence, the list has an odd number of entries (or none for empty data).
    """
    P = Persistence1D()
    P.RunPersistence(InputData)

    ExtremaAndPersistence = []
    for Pair in P.GetAllPairedExtrema():
        ExtremaAndPersistence.append((Pair.MinIndex, Pair.Persistence))
        ExtremaAndPersistence.append((Pair.MaxIndex, Pair.Persistence))

    idxGlobalMinimum = P.GetGlobalMinimumIndex()
    if (idxGlobalMinimum != UNDEFINED_GLOBAL_MINIMUM.Index):
        ExtremaAndPersistence.append((idxGlobalMinimum, np.inf))

    return ExtremaAndPersistence
