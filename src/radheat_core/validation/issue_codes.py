# src/radheat_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ConfigIssueCode(Enum):
    """
    Registry of configuration issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Required Options (CFG_REQ_...) ---
    CFG_GEOMETRY_MISSING = ("CFG_GEOMETRY_MISSING", "The '{option}' option is mandatory but was not given.")

    # --- Mutually Exclusive Options (CFG_CONFLICT_...) ---
    CFG_CACHE_CONFLICT = ("CFG_CACHE_CONFLICT", "'cache' ('{cache}') and 'write_cache' ('{write_cache}') are mutually exclusive; 'cache' is already written back after the run.")
    CFG_FLUX_CONFLICT = ("CFG_FLUX_CONFLICT", "'plot_flux' and 'by_omega_file' ('{by_omega_file}') are mutually exclusive.")
    CFG_FREQ_MODE_CONFLICT = ("CFG_FREQ_MODE_CONFLICT", "'omega_min'/'omega_max' may not be combined with a discrete frequency list ({num_frequencies} frequencies from 'omega_values'/'omega_file').")

    # --- Suspicious but Usable Options (CFG_WARN_...) ---
    CFG_CACHE_DUPLICATE = ("CFG_CACHE_DUPLICATE", "Cache file '{path}' is listed more than once as a preload source; later occurrences add nothing.")
    CFG_THREADS_INVALID = ("CFG_THREADS_INVALID", "'n_thread' is {n_thread}; a negative thread count is ignored and the evaluator default is used.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
