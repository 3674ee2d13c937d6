"""
Tunable parameters for the mixed layer depth calculations.

Defaults follow Holte and Talley (2009) and the mixedlayer.ucsd.edu code.
"""

import numpy as np

METRICS = ('threshold', 'gradient', 'fit', 'extrema', 'subsurface')

DEFAULTS = {
    'metric': 'hybrid',
    'refpres': 10.,      # Reference pressure, shallower samples are ignored -- dbar
    'tthresh': 0.2,      # Temperature threshold -- degrees C
    'tgradthresh': 0.005,  # Temperature gradient threshold -- degrees C/dbar
    'dthresh': 0.03,     # Potential density threshold -- kg/m^3
    'dgradthresh': 0.0005,  # Potential density gradient threshold -- kg/m^3/dbar
    'errortol': 1.e-10,  # Normalized error tolerance of the mixed layer fit
    'range': 25.,        # Range used to find clusters of mld candidates -- dbar
    'deltad': 100.,      # Max separation of extremum and gradient maximum -- dbar
    'tcutoffu': 0.5,     # Upper temperature cutoff for winter profiles -- degrees C
    'tcutoffl': -0.25,   # Lower temperature cutoff for winter profiles -- degrees C
    'dcutoff': -0.06,    # Density cutoff for winter profiles -- kg/m^3
    'interp': False,     # Interpolate the threshold crossing
}

_NONNEGATIVE = ('refpres', 'tthresh', 'tgradthresh', 'dthresh', 'dgradthresh',
                'errortol', 'range', 'deltad')
_FINITE = _NONNEGATIVE + ('tcutoffu', 'tcutoffl', 'dcutoff')


class MLDOptionError(ValueError):
    """Raised for an invalid caller supplied option."""


def mld_options(**kwargs):
    """
    Merge keyword options with the defaults and check them.

    Returns
    -------
    opts: dict with every key of DEFAULTS, 'metric' normalized to a tuple
          of metric names
    """
    unknown = sorted(set(kwargs) - set(DEFAULTS))
    if unknown:
        raise MLDOptionError("Unknown option(s): " + ", ".join(unknown))

    opts = dict(DEFAULTS)
    opts.update(kwargs)

    for key in _FINITE:
        try:
            val = float(opts[key])
        except (TypeError, ValueError):
            raise MLDOptionError("Option %s must be a number, got %r" % (key, opts[key]))
        if not np.isfinite(val):
            raise MLDOptionError("Option %s must be finite, got %r" % (key, opts[key]))
        if key in _NONNEGATIVE and val < 0:
            raise MLDOptionError("Option %s must be non-negative, got %r" % (key, opts[key]))
        opts[key] = val

    if opts['tcutoffl'] >= opts['tcutoffu']:
        raise MLDOptionError("tcutoffl (%r) must be less than tcutoffu (%r)"
                             % (opts['tcutoffl'], opts['tcutoffu']))

    # A tolerance of 0 leaves no top subset for the mixed layer fit
    if opts['errortol'] <= 0:
        raise MLDOptionError("Option errortol must be positive, got %r" % (opts['errortol'],))

    if not isinstance(opts['interp'], (bool, np.bool_)):
        raise MLDOptionError("Option interp must be True or False, got %r" % (opts['interp'],))
    opts['interp'] = bool(opts['interp'])
    opts['metric'] = _metric_names(opts['metric'])
    return opts


def _metric_names(metric):
    if isinstance(metric, str):
        if metric == 'hybrid':
            return METRICS
        metric = (metric,)
    try:
        names = tuple(metric)
    except TypeError:
        raise MLDOptionError("Option metric must be 'hybrid', a metric name or a sequence of names")
    if len(names) == 0:
        raise MLDOptionError("Option metric must name at least one metric")
    for name in names:
        if name not in METRICS:
            raise MLDOptionError("Unknown metric %r, expected one of %s" % (name, ", ".join(METRICS)))
    # Keep the canonical ordering so tables are laid out identically
    return tuple(m for m in METRICS if m in names)
