# Mixed layer depth (MLD) of a single profile following Holte and Talley (2009),
# "A new algorithm for finding mixed layer depths with applications to Argo data
# and Subantarctic Mode Water formation", J. Atmos. Oceanic Technol., 26, 1920-1939.
# The branch numbering follows the MATLAB code maintained on mixedlayer.ucsd.edu

import logging
from collections import namedtuple

from .options import mld_options, METRICS
from .profile import profile as _profile
from .profile import potential_density
from .gradient import linearfit as linearfit
from .metrics import CandidateTable, VARIABLES

logger = logging.getLogger(__name__)

# Order in which candidates of a cluster are trusted when the full algorithm can't run
PRECEDENCE = ('fit', 'threshold', 'gradient', 'subsurface', 'extrema')


class Decision(namedtuple('Decision', ['stage', 'branch', 'value'])):
    """One step of the selection; value is None when the step found nothing"""
    __slots__ = ()

    @property
    def found(self):
        return self.value is not None


class ResultMLD():
    '''
    Outcome of the mld selection for one profile.

    mld: the selected depth (units of pressure), None if undetermined
    variable: the variable the selected depth came from
    by_variable: consensus depth of each variable (None where there is none)
    pathway: Holte and Talley branch number per variable (None where not used)
    label: 'winter-like', 'not-winter-like' or None if the profile couldn't be classified
    table: the CandidateTable
    fits: the linearfit of each available variable
    trace: tuple of Decision, one per step of the selection
    '''

    def __init__(self, mld, variable, by_variable, pathway, label, table, fits, trace):
        self.mld = mld
        self.variable = variable
        self.by_variable = by_variable
        self.pathway = pathway
        self.label = label
        self.table = table
        self.fits = fits
        self.trace = tuple(trace)

    @property
    def undetermined(self):
        return self.mld is None

    def value(self, fill=0.0):
        """The mld as a number, with fill standing in for undetermined"""
        return fill if self.mld is None else self.mld

    def __repr__(self):
        return "ResultMLD(mld=%r, variable=%r, label=%r)" % (self.mld, self.variable, self.label)


def classify(tdiff, ddiff, opts):
    """
    To determine if the profile resembles a typical winter or summer profile,
    the temperature change across the thermocline, tdiff, is compared to the
    temperature cutoffs.  For salinity and potential density profiles, the
    potential density change across the pycnocline is also compared to a
    potential density cutoff.

    Returns
    -------
    label: 'winter-like', 'not-winter-like' or None
    testt: winter flag used by the temperature algorithm
    testd: winter flag used by the salinity and density algorithms
    """
    if tdiff is None:
        return None, False, False

    testt = (tdiff > opts['tcutoffl']) and (tdiff < opts['tcutoffu'])
    testd = testt
    if ddiff is not None and ddiff > opts['dcutoff']:
        if tdiff > opts['tcutoffu']:
            testd = True
        elif tdiff < opts['tcutoffl']:
            testd = False

    winter = testt and (ddiff is None or ddiff > opts['dcutoff'])
    label = 'winter-like' if winter else 'not-winter-like'
    return label, testt, testd


def legacy_candidates(table, prof):
    """
    The candidates as compared by the published algorithm: a threshold that is
    never exceeded sits at the bottom of the profile, any other missing
    candidate is 0.
    """
    c = {}
    for cand in table:
        if cand.depth is not None:
            c[(cand.variable, cand.metric)] = cand.depth
        elif cand.metric == 'threshold':
            c[(cand.variable, cand.metric)] = float(prof.pressure[-1])
        else:
            c[(cand.variable, cand.metric)] = 0.0
    return c


def temperature_algorithm(c, pres0, rangee, testt, tdiff):
    """Select the temperature MLD.  See the paper for a description of the steps."""
    tthr = c[('temperature', 'threshold')]
    tgrad = c[('temperature', 'gradient')]
    tfit = c[('temperature', 'fit')]
    tmax = c[('temperature', 'extrema')]
    tsub = c[('temperature', 'subsurface')]

    if not testt:
        mixedt, analysis = tfit, 1
        if tdiff < 0 and mixedt > tthr:
            mixedt, analysis = tthr, 2
        if mixedt > tthr:
            if tmax < tthr and tmax > rangee:
                mixedt, analysis = tmax, 3
            else:
                mixedt, analysis = tthr, 4
        return mixedt, analysis

    if abs(tfit-tthr) < rangee and abs(tsub-tthr) > rangee and tfit < tsub:
        mixedt, analysis = tfit, 5
    elif tsub > pres0+rangee:
        mixedt, analysis = tsub, 6
        a = [abs(tgrad-tfit), abs(tgrad-tthr), abs(tthr-tfit)]
        if sum(x < rangee for x in a) > 1:
            mixedt, analysis = tfit, 7
        if mixedt > tthr:
            mixedt, analysis = tthr, 8
    elif tfit-tthr < rangee:
        mixedt, analysis = tfit, 9
    else:
        mixedt, analysis = tgrad, 10
        if mixedt > tthr:
            mixedt, analysis = tthr, 11

    if mixedt == 0 and abs(mixedt-tthr) > rangee:
        mixedt, analysis = tmax, 12
        if tmax == pres0:
            mixedt, analysis = tthr, 13
        if tmax > tthr:
            mixedt, analysis = tthr, 14
    return mixedt, analysis


def salinity_algorithm(c, mixedt, rangee, testd):
    """Select the salinity MLD"""
    dthr = c[('density', 'threshold')]
    sgrad = c[('salinity', 'gradient')]
    sfit = c[('salinity', 'fit')]
    ssub = c[('salinity', 'subsurface')]

    if not testd:
        mixeds, analysis = sfit, 1
        if mixeds-dthr > rangee:
            mixeds, analysis = dthr, 2
        if sfit-sgrad < 0 and dthr-sgrad > 0:
            mixeds, analysis = sgrad, 3
        if sfit-ssub < rangee and ssub > rangee:
            mixeds, analysis = ssub, 4
        if abs(dthr-ssub) < rangee and ssub > rangee:
            mixeds, analysis = ssub, 5
        if mixedt-dthr < 0 and abs(mixedt-dthr) < rangee:
            mixeds, analysis = mixedt, 6
            if abs(mixedt-sfit) < rangee and sfit-dthr < 0:
                mixeds, analysis = sfit, 7
        if abs(mixedt-dthr) < abs(mixeds-dthr):
            if mixedt > dthr:
                mixeds, analysis = dthr, 8
        return mixeds, analysis

    if ssub > rangee:
        mixeds, analysis = ssub, 9
        if mixeds > dthr:
            mixeds, analysis = dthr, 10
    elif sgrad < dthr:
        mixeds, analysis = sgrad, 11
        if sfit < mixeds:
            mixeds, analysis = sfit, 12
    else:
        mixeds, analysis = dthr, 13
        if sfit < mixeds:
            mixeds, analysis = sfit, 14
        # Carried over from the published code, which tests against 1 rather than 0
        if mixeds == 1:
            mixeds, analysis = sgrad, 15
        if sgrad > dthr:
            mixeds, analysis = dthr, 16
    return mixeds, analysis


def density_algorithm(c, mixedt, mixeds, rangee, testd):
    """Select the potential density MLD"""
    dthr = c[('density', 'threshold')]
    dgrad = c[('density', 'gradient')]
    dfit = c[('density', 'fit')]
    dmin = c[('density', 'extrema')]
    tthr = c[('temperature', 'threshold')]
    tmax = c[('temperature', 'extrema')]
    tsub = c[('temperature', 'subsurface')]
    sfit = c[('salinity', 'fit')]

    if not testd:
        mixedd, analysis = dfit, 1
        if mixedd > dthr:
            mixedd, analysis = dthr, 2
        aa = [abs(mixeds-mixedt), abs(dfit-mixedt), abs(mixeds-dfit)]
        if sum(x < rangee for x in aa) > 1:
            mixedd, analysis = dfit, 3
        if abs(mixeds-dthr) < rangee and mixeds != dthr:
            if dthr < mixeds:
                mixedd, analysis = dthr, 4
            else:
                mixedd, analysis = mixeds, 5
            if dfit == dthr:
                mixedd, analysis = dfit, 6
        if mixedd > dgrad and abs(dgrad-mixedt) < abs(mixedd-mixedt):
            mixedd, analysis = dgrad, 7
        return mixedd, analysis

    mixedd, analysis = dthr, 8
    if tthr < mixedd:
        mixedd, analysis = tthr, 9
    if dfit < dthr and dfit > rangee:
        mixedd, analysis = dfit, 10
    if tsub > rangee and tsub < dthr:
        mixedd, analysis = tsub, 11
        if abs(tmax-dfit) < abs(tsub-dfit):
            mixedd, analysis = tmax, 12
        if abs(mixeds-dthr) < rangee and mixeds < dthr:
            mixedd, analysis = min(dthr, mixeds), 13
    if abs(mixedt-mixeds) < rangee:
        if abs(min(mixedt, mixeds)-mixedd) > rangee:
            mixedd, analysis = min(mixedt, mixeds), 14
    if mixedd > dgrad and abs(dgrad-mixedt) < abs(mixedd-mixedt):
        mixedd, analysis = dgrad, 15
    if dfit == sfit and abs(sfit-dthr) < rangee:
        mixedd, analysis = dfit, 16
    if mixedt == dmin:
        mixedd, analysis = dmin, 17
    return mixedd, analysis


def cluster_consensus(candidates, rangee):
    """
    Groups candidates lying within rangee of each other and returns the
    (depth, metric) of the most trusted member of the largest group.
    """
    if len(candidates) == 0:
        return None, None

    ordered = sorted(candidates, key=lambda cand: PRECEDENCE.index(cand.metric))
    best = None
    for seed in ordered:
        members = [cand for cand in ordered
                   if cand is seed or abs(cand.depth-seed.depth) < rangee]
        if best is None or len(members) > len(best):
            best = members
    return best[0].depth, best[0].metric


def reconcile(label, by_variable):
    """Winter profiles trust density first, all others trust temperature first"""
    if label == 'winter-like':
        order = ('density', 'temperature', 'salinity')
    else:
        order = ('temperature', 'density', 'salinity')
    for variable in order:
        if by_variable.get(variable) is not None:
            return by_variable[variable], variable
    return None, None


class holtetalley():
    '''
    Runs the candidate metrics on one profile and selects the mixed layer depth.

    The outcome is stored in self.result (a ResultMLD).  The intermediate values
    of the published algorithm are kept as attributes for diagnostics.
    '''

    def __init__(self, pressure, temperature, salinity=None, density=None,
                 eos=potential_density, **options):

        opts = mld_options(**options)
        self.opts = opts

        prof = _profile(pressure, temperature, salinity=salinity, density=density,
                        refpres=opts['refpres'], eos=eos)
        self.profile = prof
        self.table = CandidateTable(prof, opts)

        self.mixedt = self.mixeds = self.mixedd = None
        self.analysis_t = self.analysis_s = self.analysis_d = None
        self.testt = self.testd = False
        self.tdiff = self.ddiff = None
        self.fits = {}

        if not prof.valid:
            self.result = ResultMLD(None, None, dict.fromkeys(VARIABLES), dict.fromkeys(VARIABLES),
                                    None, self.table, self.fits,
                                    [Decision('preprocess', 'insufficient-data', None)])
            return

        trace = [Decision('preprocess', 'ok', len(prof))]

        # Classification
        for variable in prof.variables:
            self.fits[variable] = linearfit(prof.pressure, prof.variable(variable), opts['errortol'])
        if len(prof) >= 4:
            self.tdiff = self.fits['temperature'].ydiff
            if 'density' in self.fits:
                self.ddiff = self.fits['density'].ydiff
        label, self.testt, self.testd = classify(self.tdiff, self.ddiff, opts)
        trace.append(Decision('classify', label or 'unclassified', self.tdiff))

        # Pruning
        discarded = sum(1 for cand in self.table if cand.depth is None)
        trace.append(Decision('prune', 'discarded', discarded))

        # Consensus per variable
        by_variable = dict.fromkeys(VARIABLES)
        pathway = dict.fromkeys(VARIABLES)
        hybrid = (self.table.metrics == METRICS)
        full_ts = (hybrid and prof.salinity is not None and prof.density is not None)
        legacy = legacy_candidates(self.table, prof)
        rangee = opts['range']

        if hybrid:
            self.mixedt, self.analysis_t = temperature_algorithm(
                legacy, float(prof.pressure[0]), rangee, self.testt, self.tdiff or 0.0)
        if full_ts:
            self.mixeds, self.analysis_s = salinity_algorithm(legacy, self.mixedt, rangee, self.testd)
            self.mixedd, self.analysis_d = density_algorithm(
                legacy, self.mixedt, self.mixeds, rangee, self.testd)

        algorithm = {'temperature': (self.mixedt, self.analysis_t),
                     'salinity': (self.mixeds, self.analysis_s),
                     'density': (self.mixedd, self.analysis_d)}

        for variable in VARIABLES:
            depth, analysis = algorithm[variable]
            if analysis is not None:
                pathway[variable] = analysis
                # 0 is how the published algorithm reports a missing depth
                depth = depth if depth > 0 else None
                branch = 'pathway-%d' % analysis if depth is not None else 'not-found'
            else:
                depth, metric = cluster_consensus(self.table.candidates(variable), rangee)
                branch = 'cluster-' + metric if depth is not None else 'not-found'
            by_variable[variable] = depth
            if prof.variable(variable) is not None:
                trace.append(Decision('consensus:' + variable, branch, depth))
            logger.debug("%s consensus %s (%s)", variable, depth, branch)

        # Cross variable reconciliation
        mld, variable = reconcile(label, by_variable)
        trace.append(Decision('reconcile', variable or 'undetermined', mld))

        self.result = ResultMLD(mld, variable, by_variable, pathway, label,
                                self.table, self.fits, trace)


def mld(pressure, temperature, salinity=None, density=None, eos=potential_density, **options):
    """
    Mixed layer depth of one profile following Holte and Talley (2009)

    Parameters
    ----------
    pressure: The pressure (dbar), need not be sorted
    temperature: The conservative temperature (deg C)
    salinity: The absolute salinity (g/kg), optional
    density: The potential density anomaly (kg/m3), optional, computed from
             salinity and temperature with eos if not given
    eos: callable(salinity, temperature) returning potential density anomaly
    options: see options.DEFAULTS

    Returns
    -------
    result: ResultMLD, result.mld is None if no depth could be determined
    """
    return holtetalley(pressure, temperature, salinity=salinity, density=density,
                       eos=eos, **options).result
