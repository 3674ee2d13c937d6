import numpy as np
import gsw as gsw
from .threshold import threshold as _threshold
from .gradient import gradient as _gradient
from .gradient import linearfit as _linearfit
from .holtetalley import mld as _mld


class column():
    '''
    An idealized cast on a uniform pressure grid (dbar, positive downward).

    idealized_type='linear':    T = T0 - p*dTdp, S = S0 + p*dSdp
    idealized_type='two-layer': uniform T0/S0 above p = mixedfrac*Dpt, then
                                Tb0 - (p-p_mixed)*dTdp (similar for S) below
    Temperatures are bounded below by Tmin and salinities by Smin.
    '''

    def __init__(self,
                 idealized_type='two-layer', T0=15., dTdp=0., S0=35., dSdp=0., Tb0=None, Sb0=None,
                 Tmin=-2., Smin=0., mixedfrac=0.2,
                 EOS='Full', rho0=1025.,
                 nz=50, Dpt=500., Ptop=10.,
                 ):

        self.rho0 = rho0
        self.EOS = EOS

        self.nz = nz
        self.Dpt = Dpt
        self.Ptop = Ptop
        self.T0 = T0
        self.S0 = S0
        self.dTdp = dTdp
        self.dSdp = dSdp
        self.Tmin = Tmin
        self.Smin = Smin
        self.Tb0 = T0 if Tb0 is None else Tb0
        self.Sb0 = S0 if Sb0 is None else Sb0
        self.idealized_type = idealized_type
        self.mixedfrac = mixedfrac

        self.SetGrid()
        self.SetState()

    def SetGrid(self):
        """Set up a grid of nz levels from Ptop to Dpt"""
        self.p = np.linspace(self.Ptop, self.Dpt, self.nz)

    def SetState(self):
        """Set up the T/S distributions for a given T0, dTdp, and Tmin (similar for S)."""
        if self.idealized_type == 'linear':
            self.T = np.maximum(self.Tmin, self.T0-self.p*self.dTdp)
            self.S = np.maximum(self.Smin, self.S0+self.p*self.dSdp)
        elif self.idealized_type == 'two-layer':
            mixed_p = self.mixedfrac*self.Dpt
            self.T = np.where(self.p <= mixed_p, self.T0,
                              np.maximum(self.Tmin, self.Tb0-(self.p-mixed_p)*self.dTdp))
            self.S = np.where(self.p <= mixed_p, self.S0,
                              np.maximum(self.Smin, self.Sb0+(self.p-mixed_p)*self.dSdp))
        else:
            raise ValueError("Unrecognized idealized_type %r" % (self.idealized_type,))
        self.GetRho()

    def GetRho(self):
        """Potential density anomaly (kg/m3 - 1000)"""
        if self.EOS == 'Full':
            self.prho = gsw.density.rho(self.S, self.T, 0.)-1000.
        elif self.EOS == 'Linear':
            self.prho = self.rho0+(self.S-35)*0.8-(self.T-10)*0.2-1000.
        else:
            raise ValueError("Unrecognized EOS %r" % (self.EOS,))

    @property
    def mixed_p(self):
        return self.mixedfrac*self.Dpt

    def threshold(self, var='prho', delta=0.03):
        return _threshold.threshold_mld(self.p, getattr(self, var), delta)

    def gradient(self, var='prho', critical_gradient=0.0005):
        return _gradient.gradient_mld(self.p, getattr(self, var), critical_gradient)

    def linearfit(self, var='prho', error_tolerance=1.0e-10):
        return _linearfit(self.p, getattr(self, var), error_tolerance).mld

    def holtetalley(self, **options):
        return _mld(self.p, self.T, salinity=self.S, density=self.prho, **options)
