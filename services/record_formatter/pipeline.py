"""
Filter pipeline for the record formatter.
Loads the configured filter chain and runs every record through the stages
whose tag pattern matches. Records are always emitted; a failing stage is
logged and skipped.
"""
import json
import os
from fnmatch import fnmatchcase
from typing import List, NamedTuple, Optional

import yaml
from jsonschema import ValidationError, validate

from common.logging_config import log_audit_event, setup_logging
from record_formatter.formatters import FILTERS, FilterResult

logger = setup_logging('record_formatter')

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
SCHEMA_DIR = os.path.join(_PACKAGE_DIR, "schemas")
DEFAULT_PIPELINE_PATH = os.path.join(_PACKAGE_DIR, "pipeline.yaml")

_TRUE_VALUES = ("true", "t", "yes", "y", "1")


class PipelineConfigError(ValueError):
    """Raised when a pipeline definition cannot be used"""


class Stage(NamedTuple):
    match: str
    call: str


def _load_schema(name: str) -> dict:
    with open(os.path.join(SCHEMA_DIR, name), "r") as f:
        return json.load(f)


PIPELINE_SCHEMA = _load_schema("pipeline.json")
CANONICAL_RECORD_SCHEMA = _load_schema("canonical_record.json")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUE_VALUES


class Pipeline:
    """An ordered chain of tag-matched formatter stages"""

    def __init__(self, stages: List[Stage], validate_output: bool = False):
        for stage in stages:
            if stage.call not in FILTERS:
                raise PipelineConfigError(f"Unknown filter '{stage.call}'")
        self.stages = list(stages)
        self.validate_output = validate_output

    def stages_for(self, tag: str) -> List[Stage]:
        return [s for s in self.stages if fnmatchcase(tag or "", s.match)]

    def process(self, tag, timestamp, record: dict) -> FilterResult:
        """
        Run one record through every matching stage

        Args:
            tag: routing tag of the record
            timestamp: ingest timestamp supplied by the shipper
            record: the record to format

        Returns:
            FilterResult of the last stage that ran
        """
        result = FilterResult(True, timestamp, record)
        for stage in self.stages_for(tag):
            try:
                result = FILTERS[stage.call](tag, result.timestamp, result.record)
            except Exception as e:
                logger.error("Formatter stage failed, passing record through", extra={
                    'stage': stage.call,
                    'tag': tag,
                    'error': str(e)
                }, exc_info=True)
                continue
            # Bundled filters always emit; filters registered from outside may hold a record back
            if not result.emit:
                break

        if self.validate_output:
            self._check_canonical(tag, result.record)
        return result

    def _check_canonical(self, tag, record: dict) -> None:
        try:
            validate(record, CANONICAL_RECORD_SCHEMA)
        except ValidationError as ve:
            logger.warning("Record does not match the canonical schema", extra={
                'tag': tag,
                'validation_error': ve.message
            })


def load_pipeline(path: Optional[str] = None, validate_output: Optional[bool] = None) -> Pipeline:
    """
    Load a pipeline definition from YAML

    Args:
        path: YAML file (default: FORMATTER_PIPELINE_CONFIG env, else the bundled pipeline.yaml)
        validate_output: check results against the canonical schema
                         (default: FORMATTER_VALIDATE_OUTPUT env)

    Returns:
        Configured Pipeline

    Raises:
        PipelineConfigError: if the file is unreadable or invalid
    """
    if path is None:
        path = os.getenv("FORMATTER_PIPELINE_CONFIG") or DEFAULT_PIPELINE_PATH
    if validate_output is None:
        validate_output = _env_flag("FORMATTER_VALIDATE_OUTPUT")

    try:
        with open(path, "r") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to read pipeline config", extra={'path': path, 'error': str(e)})
        raise PipelineConfigError(f"Cannot read pipeline config {path}: {e}") from e

    try:
        validate(config, PIPELINE_SCHEMA)
    except ValidationError as ve:
        logger.error("Invalid pipeline config", extra={'path': path, 'validation_error': ve.message})
        raise PipelineConfigError(f"Invalid pipeline config {path}: {ve.message}") from ve

    stages = [Stage(s["match"], s["call"]) for s in config["stages"]]
    pipeline = Pipeline(stages, validate_output=validate_output)

    log_audit_event(logger, 'pipeline_loaded',
                    path=path,
                    stages=[s.call for s in stages],
                    validate_output=validate_output)
    return pipeline
