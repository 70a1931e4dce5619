# --- src/radheat_core/constants.py ---
import logging
from .units import ureg

logger = logging.getLogger(__name__)

# --- Physical Constants (SI magnitudes) ---

#: Reduced Planck constant in J*s.
HBAR_J_S: float = ureg.Quantity(1, 'hbar').to('J*s').magnitude

#: Boltzmann constant in J/K.
BOLTZMANN_J_PER_K: float = ureg.Quantity(1, 'boltzmann_constant').to('J/K').magnitude

#: Speed of light in vacuum in m/s.
SPEED_OF_LIGHT_M_S: float = ureg.Quantity(1, 'speed_of_light').to('m/s').magnitude

# --- Run Defaults ---

#: Name of the single transformation used when no transformation file is given.
DEFAULT_TRANSFORMATION_NAME: str = "DEFAULT"

#: Registry name of the evaluator used when the configuration names none.
DEFAULT_EVALUATOR_NAME: str = "point_dipole"

#: Suffix of the frequency-resolved output file derived from the geometry file.
BY_OMEGA_SUFFIX: str = ".byOmega"

#: Suffix of the frequency-integrated output file derived from the geometry file.
OUTPUT_SUFFIX: str = ".out"

#: Suffix of the spatially-resolved flux files.
FLUX_SUFFIX: str = ".flux"

logger.debug("Defined physical constants: HBAR_J_S, BOLTZMANN_J_PER_K, SPEED_OF_LIGHT_M_S")
