# src/radheat_core/validation/config_validator.py
import logging
from typing import List

from ..config.run_config import RunConfig
from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import ConfigIssueCode
from .exceptions import MissingRequiredOption, ConflictingOptions

logger = logging.getLogger(__name__)


class ConfigValidator:
    """
    Checks the cross-option constraints of a `RunConfig` in one up-front pass.

    Validation never touches the file system and never starts a computation. It
    collects every issue it finds, so a single run reports all problems at once.
    """

    def __init__(self, config: RunConfig):
        if not isinstance(config, RunConfig):
            raise TypeError("ConfigValidator requires a RunConfig object.")
        self.config = config
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Returns every `ValidationIssue` found (errors and warnings). The caller decides
        whether to halt; `validate_or_raise` is the usual way to do so.
        """
        self.issues = []
        logger.info("Validating run configuration...")
        self._check_required_options()
        self._check_cache_options()
        self._check_output_options()
        self._check_thread_count()

        if self.issues:
            errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
            warnings = sum(1 for i in self.issues if i.level == ValidationIssueLevel.WARNING)
            logger.info(f"Configuration validation complete. Found: {errors} errors, {warnings} warnings.")
            for issue in self.issues:
                if issue.level == ValidationIssueLevel.WARNING:
                    logger.warning(str(issue))
        else:
            logger.info("Configuration validation complete with no issues found.")
        return self.issues

    def validate_or_raise(self) -> List[ValidationIssue]:
        """
        Runs `validate` and raises if any error was found.

        Raises:
            MissingRequiredOption: if a mandatory option is absent (takes precedence).
            ConflictingOptions: if mutually exclusive options were combined.
        """
        issues = self.validate()
        errors = [i for i in issues if i.level == ValidationIssueLevel.ERROR]
        if not errors:
            return issues
        if any(i.code == ConfigIssueCode.CFG_GEOMETRY_MISSING.code for i in errors):
            raise MissingRequiredOption(issues)
        raise ConflictingOptions(issues)

    def _add_issue(self, level: ValidationIssueLevel, code_enum: ConfigIssueCode, options: tuple, **kwargs):
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message, options=options, details=kwargs
        ))

    def _check_required_options(self):
        if self.config.geometry is None:
            self._add_issue(ValidationIssueLevel.ERROR, ConfigIssueCode.CFG_GEOMETRY_MISSING,
                            options=('geometry',), option='geometry')

    def _check_cache_options(self):
        cfg = self.config
        if cfg.cache is not None and cfg.write_cache is not None:
            self._add_issue(ValidationIssueLevel.ERROR, ConfigIssueCode.CFG_CACHE_CONFLICT,
                            options=('cache', 'write_cache'), cache=cfg.cache, write_cache=cfg.write_cache)

        seen = set()
        for path in cfg.preload_sources:
            if path in seen:
                self._add_issue(ValidationIssueLevel.WARNING, ConfigIssueCode.CFG_CACHE_DUPLICATE,
                                options=('read_caches',), path=path)
            seen.add(path)

    def _check_output_options(self):
        cfg = self.config
        if cfg.plot_flux and cfg.by_omega_file is not None:
            self._add_issue(ValidationIssueLevel.ERROR, ConfigIssueCode.CFG_FLUX_CONFLICT,
                            options=('plot_flux', 'by_omega_file'), by_omega_file=cfg.by_omega_file)

    def _check_thread_count(self):
        if self.config.n_thread < 0:
            self._add_issue(ValidationIssueLevel.WARNING, ConfigIssueCode.CFG_THREADS_INVALID,
                            options=('n_thread',), n_thread=self.config.n_thread)
