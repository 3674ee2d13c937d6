"""
The five candidate mld metrics, which variables each applies to, and the
table of candidates they produce for one profile.
"""

import logging
from collections import namedtuple

import numpy as np

from .threshold import threshold as threshold
from .gradient import gradient as gradient
from .gradient import linearfit as linearfit
from .extrema import extrema as extrema
from .subsurface import subsurface as subsurface
from .options import METRICS

logger = logging.getLogger(__name__)

VARIABLES = ('temperature', 'salinity', 'density')

# Which metric applies to which variable, and with what parameter.  Threshold and
# gradient map to the option holding the threshold (None = maximum gradient only),
# extrema and subsurface to the kind of extremum sought.  Missing entries are not
# applicable.
CAPABILITIES = {
    'threshold': {'temperature': 'tthresh', 'density': 'dthresh'},
    'gradient': {'temperature': 'tgradthresh', 'salinity': None, 'density': 'dgradthresh'},
    'fit': {'temperature': None, 'salinity': None, 'density': None},
    'extrema': {'temperature': 'max', 'salinity': 'min', 'density': 'min'},
    'subsurface': {'temperature': 'max', 'salinity': 'min'},
}

CandidateDepth = namedtuple('CandidateDepth', ['metric', 'variable', 'depth'])


def threshold_metric(prof, variable, opts):
    delta = opts[CAPABILITIES['threshold'][variable]]
    return threshold.threshold_mld(prof.pressure, prof.variable(variable), delta, interp=opts['interp'])


def gradient_metric(prof, variable, opts):
    key = CAPABILITIES['gradient'][variable]
    if key is None:
        return gradient.max_gradient(prof.pressure, prof.variable(variable), 'extreme')
    return gradient.gradient_mld(prof.pressure, prof.variable(variable), opts[key])


def fit_metric(prof, variable, opts):
    return linearfit(prof.pressure, prof.variable(variable), opts['errortol']).mld


def extrema_metric(prof, variable, opts):
    return extrema.extrema_mld(prof.pressure, prof.variable(variable), CAPABILITIES['extrema'][variable])


def subsurface_metric(prof, variable, opts):
    return subsurface.subsurface_mld(prof.pressure, prof.variable(variable),
                                     CAPABILITIES['subsurface'][variable], opts['deltad'])


STRATEGIES = (
    ('threshold', threshold_metric),
    ('gradient', gradient_metric),
    ('fit', fit_metric),
    ('extrema', extrema_metric),
    ('subsurface', subsurface_metric),
)


def applicable(metric, variable):
    return variable in CAPABILITIES[metric]


class CandidateTable():
    '''
    All candidate depths computed for one profile.

    Every (variable, metric) pair is present; None marks a candidate that was
    not found, not applicable, not requested or not computable.
    '''

    def __init__(self, prof, opts):
        self.metrics = tuple(opts['metric'])
        self._depths = {}

        for variable in VARIABLES:
            for metric, strategy in STRATEGIES:
                depth = None
                if (prof.valid and metric in self.metrics and applicable(metric, variable)
                        and prof.variable(variable) is not None):
                    with np.errstate(divide='ignore', invalid='ignore'):
                        depth = strategy(prof, variable, opts)
                self._depths[(variable, metric)] = depth

        logger.debug("Candidates: %s", self._depths)

    def __getitem__(self, key):
        return self._depths[key]

    def get(self, variable, metric):
        return self._depths[(variable, metric)]

    def __iter__(self):
        for variable in VARIABLES:
            for metric in METRICS:
                yield CandidateDepth(metric, variable, self._depths[(variable, metric)])

    def candidates(self, variable):
        """The candidates of one variable that were found, in table order"""
        return [c for c in self if c.variable == variable and c.depth is not None]

    def as_array(self):
        """3 x 5 array, rows temperature, salinity, density and columns threshold,
        gradient, fit, extrema, subsurface, with NaN where there is no candidate"""
        mldval = np.full((len(VARIABLES), len(METRICS)), np.nan)
        for c in self:
            if c.depth is not None:
                mldval[VARIABLES.index(c.variable), METRICS.index(c.metric)] = c.depth
        return mldval

    def complete(self, variable, prof):
        """True if every metric applicable to the variable was requested and could run"""
        if not prof.valid or prof.variable(variable) is None:
            return False
        return all(m in self.metrics for m in METRICS if applicable(m, variable))
