from .threshold import threshold as _threshold
from .gradient import gradient as _gradient
from .gradient import linearfit as _linearfit
from .extrema import extrema as _extrema
from .subsurface import subsurface as _subsurface
from .holtetalley import mld as _mld
from .profile import profile as _profile
from .profile import potential_density as _potential_density
from .column import column as _column


class hybridmixedlayer:
    """
    Main class for the mixed layer depth computations.

    The single metric methods expect a profile that is already trimmed
    (see profile), and return None where no mixed layer depth is found.
    """

    def column(**kwargs):
        """
        Used to get an idealized column of ocean properties
        """
        return _column(**kwargs)

    def profile(pressure, temperature, salinity=None, density=None, refpres=10., eos=_potential_density):
        """
        Sort and trim a cast to the finite samples at or below refpres,
        density is computed from salinity with eos when not given
        """
        return _profile(pressure, temperature, salinity=salinity, density=density,
                        refpres=refpres, eos=eos)

    def threshold(coordinate, value, delta=0.2, interp=False):
        """
        Interface to the threshold method mixed layer depth computation.
        Parameters
        ----------
        coordinate: the vertical coordinate
                    (e.g., depth or pressure)
        value: the value being checked for the threshold mld
               (e.g., temperature or density)
        delta: the departure threshold used to find the mld
               (same units as value)
        interp: interpolate to the exact threshold crossing

        Returns
        -------
        mld: The mixed layer depth in units of the input coordinate
        """

        mld = _threshold.threshold_mld(coordinate, value, delta, interp=interp)

        return mld

    def gradient(coordinate, value, critical_gradient=0.005):
        """
        Interface to the gradient method mixed layer depth computation.
        Parameters
        ----------
        coordinate: the vertical coordinate
                    (e.g., depth or pressure)
        value: the value being checked for the gradient mld
               (e.g., temperature, density, etc.)
        critical_gradient: the critical gradient for the mld, None to use the
                           maximum (centred) gradient
                           (units as value/coordinate)

        Returns
        -------
        mld: The mixed layer depth in units of the input coordinate
        """

        if critical_gradient is None:
            return _gradient.max_gradient(coordinate, value, 'extreme')
        mld = _gradient.gradient_mld(coordinate, value, critical_gradient)

        return mld

    def linearfit(coordinate, value, error_tolerance=1.0e-10):
        """
        Interface to the linear fit method mixed layer depth computation.
        Parameters
        ----------
        coordinate: the vertical coordinate
                    (e.g., depth or pressure)
        value: the value being checked for the fit mld
               (e.g., temperature, density, etc.)
        error_tolerance: the normalized error from a linear fit used to set the mixed layer slope
                         Solved as summation (value-value_fit)^2 over the sum for all depths

        Returns
        -------
        mld: The mixed layer depth in units of the input coordinate
        """

        mld = _linearfit(coordinate, value, error_tolerance).mld

        return mld

    def extrema(coordinate, value, kind='max'):
        """
        Interface to the extrema method mixed layer depth computation.
        kind is 'max' for temperature and 'min' for salinity and density.
        """
        return _extrema.extrema_mld(coordinate, value, kind)

    def subsurface(coordinate, value, kind='max', deltad=100.):
        """
        Interface to the subsurface anomaly mixed layer depth computation.
        kind is 'max' for temperature and 'min' for salinity.
        """
        return _subsurface.subsurface_mld(coordinate, value, kind, deltad)

    def holtetalley(pressure, temperature, salinity=None, density=None, **options):
        """
        Interface to the Holte and Talley algorithm mixed layer depth computation.

        Parameters
        ----------
        pressure: The pressure (units of dbar)
        temperature: The conservative temperature (units of deg C)
        salinity: The absolute salinity (units of g/kg)
        density: The potential density anomaly (kg/m3), from salinity if not given
        options: tunable parameters, see options.DEFAULTS

        Returns
        -------
        result: ResultMLD, the mixed layer depth in units of pressure is result.mld
        """

        return _mld(pressure, temperature, salinity=salinity, density=density, **options)
