"""
Application configuration for the log narrative analyzer.

Provides environment-aware settings with conservative defaults. All windowing
and detection thresholds are configurable to avoid hard-coded "magic numbers".
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StatsConfig(BaseModel):
	"""
	Configuration for statistics aggregation.

	Notes:
	- bucket_size_seconds: width of the per-severity time series buckets.
	- top_n_patterns: number of frequent message shapes to keep.
	- min_pattern_length: shorter messages are not considered for patterns.
	"""

	bucket_size_seconds: int = Field(60, gt=0)
	top_n_patterns: int = Field(10, ge=0)
	min_pattern_length: int = Field(10, ge=0)


class IndexConfig(BaseModel):
	"""Configuration for the in-memory event index."""

	bucket_size_seconds: int = Field(60, gt=0)


class EpisodeConfig(BaseModel):
	"""
	Configuration for episode segmentation.

	Notes:
	- time_gap_seconds: a larger gap between consecutive timed events starts a new episode.
	- merge_by_correlation: merge adjacent episodes sharing a correlation id.
	"""

	time_gap_seconds: int = Field(300, ge=0)
	merge_by_correlation: bool = True


class ErrorBurstConfig(BaseModel):
	"""
	Thresholds for error burst detection.

	Rationale:
	- A bucket must clear both an absolute floor and a multiple of the
	  average populated-bucket error count to count as a burst.
	"""

	threshold_multiplier: float = Field(3.0, gt=0.0, description="Burst = N * baseline rate")
	min_errors_for_burst: int = Field(10, ge=1, description="Absolute floor per bucket")


class RestartLoopConfig(BaseModel):
	"""
	Thresholds for restart loop detection.

	Notes:
	- Keywords are matched case-insensitively as substrings of the message.
	"""

	min_restart_count: int = Field(3, ge=1)
	time_window_seconds: int = Field(600, ge=0)
	restart_keywords: List[str] = Field(
		default_factory=lambda: [
			"starting",
			"started",
			"shutdown",
			"stopping",
			"stopped",
			"restarting",
			"restart",
			"initializing",
			"initialized",
		]
	)


class AnalysisConfig(BaseModel):
	"""
	Analysis pipeline configuration.
	"""

	stats: StatsConfig = StatsConfig()
	index: IndexConfig = IndexConfig()
	episodes: EpisodeConfig = EpisodeConfig()
	error_burst: ErrorBurstConfig = ErrorBurstConfig()
	restart_loop: RestartLoopConfig = RestartLoopConfig()


class Config(BaseSettings):
	"""
	Global configuration with environment overrides.

	Nested values use a double underscore, e.g.
	LOGNARRATIVE_ANALYSIS__EPISODES__TIME_GAP_SECONDS=120.
	"""

	model_config = SettingsConfigDict(
		env_prefix="LOGNARRATIVE_",
		env_file=".env",
		env_nested_delimiter="__",
		extra="ignore",
	)

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")
	log_to_file: bool = Field(False, description="Also write a rotating log file")
	analysis: AnalysisConfig = AnalysisConfig()


config = Config()
