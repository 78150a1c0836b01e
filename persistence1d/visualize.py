import logging

import matplotlib.pyplot as plt
import numpy as np

from .persistence1d import NO_FILTERING

logger = logging.getLogger(__name__)


def Visualize(Data, Engine, Threshold = NO_FILTERING, FigAx = None, Style = 'data extrema', DataLabel = None, bShow = False, SaveFilename = None):
    """
    Plots the data together with the paired minima/maxima of Engine whose persistence exceeds Threshold.
    The global minimum is always marked.

    Engine is a Persistence1D object that has been run on Data.
    Style is a combination of 'data', 'extrema', 'fat'/'thin' and 'dashed'/'dotted'.
    Pass a (fig, ax) tuple as FigAx to draw into an existing plot.
    """

    Data = np.asarray(Data, dtype=np.float64)
    SizeFactor = 1.5 if ('fat' in Style) else 0.5 if ('thin' in Style) else 1.0
    DashedDotted = 'dashed' if ('dashed' in Style) else 'dotted' if ('dotted' in Style) else 'solid'

    #~ Define colors and other style choices
    LineStyle = dict(color=(0.0, 0., 0.), linewidth=1*SizeFactor, linestyle=DashedDotted)
    MarkerStyleMinima = dict(linestyle='', markersize=8*SizeFactor, color=(0.3, 0.3, 1.0))
    MarkerStyleMaxima = dict(linestyle='', markersize=8*SizeFactor, color=(1.0, 0.2, 0.2))

    #~ Create Plot
    if FigAx is None:
        fig, ax = plt.subplots()
        fig.set_size_inches(19.20/2, 10.80/2, forward=True)
        fig.set_dpi(200)
        fig.set_layout_engine('tight')
    else:
        fig, ax = FigAx

    #~ Plot the data as a line plot
    if ('data' in Style):
        ax.plot(range(0, len(Data)), Data, **LineStyle, label=DataLabel)

    #~ Plot the minima and maxima
    if ('extrema' in Style):
        (MinimaIdx, MaximaIdx) = Engine.GetExtremaIndices(Threshold)
        idxGlobalMinimum = Engine.GetGlobalMinimumIndex()
        if (idxGlobalMinimum >= 0):
            MinimaIdx = MinimaIdx + [idxGlobalMinimum]
        MinimaIdx = np.asarray(MinimaIdx, dtype=np.intp)
        MaximaIdx = np.asarray(MaximaIdx, dtype=np.intp)
        ax.plot(MinimaIdx, Data[MinimaIdx], marker='.', label='Minima', **MarkerStyleMinima)
        ax.plot(MaximaIdx, Data[MaximaIdx], marker='.', label='Maxima', **MarkerStyleMaxima)

    #~ Set some labels
    ax.set(xlabel='data index', ylabel='data value')
    if len(Data) > 1:
        ax.set_aspect(1.0/ax.get_data_ratio()*0.2)

    #~ Place a legend above this subplot, expanding itself to fully use the given bounding box.
    ax.legend(bbox_to_anchor=(0., 1.02, 1., .102), loc='lower left', ncol=3, mode="expand", borderaxespad=0.)

    #~ Save picture as PNG and show the interactive window
    if SaveFilename is not None:
        fig.savefig(SaveFilename)
        logger.info("Saved visualization as %s", SaveFilename)
    if (bShow):
        plt.show()

    return (fig, ax)
