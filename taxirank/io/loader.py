"""Data loading utilities."""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import yaml

from ..errors import ConfigError, ParseError
from ..models.passenger import Passenger, RouteTag
from ..simulation.engine import SimulationConfig
from ..simulation.state import DEFAULT_ROUTE_ORDER


logger = logging.getLogger(__name__)

UNKNOWN_ROUTE_TAG = "?"


class FeedReader:
    """
    Reads the passenger feed.

    Expected format, one record per line:
    arrival_tick, route_tag, boarding_duration
    0, S, 2
    0, L, 1
    ...

    Malformed records are skipped; only a missing or unreadable file is fatal.
    """

    @staticmethod
    def parse_line(line: str) -> Optional[Passenger]:
        """
        Parse a single feed line.

        Args:
            line: Raw line from the feed

        Returns:
            Passenger, or None if the line should be skipped
        """
        line = line.replace("\r", "").strip()
        if not line:
            return None

        fields = [part.strip() for part in line.split(",")]
        if len(fields) < 2:
            logger.debug("Skipping record with too few fields: %r", line)
            return None

        tick_str, route_str = fields[0], fields[1]
        duration_str = fields[2] if len(fields) > 2 else ""

        try:
            arrival_tick = int(tick_str)
            boarding_duration = int(duration_str) if duration_str else 0
        except ValueError:
            logger.debug("Skipping record with non-integer field: %r", line)
            return None

        if arrival_tick < 0 or boarding_duration < 0:
            logger.debug("Skipping record with negative field: %r", line)
            return None

        route_tag = route_str[0] if route_str else UNKNOWN_ROUTE_TAG

        return Passenger(
            arrival_tick=arrival_tick,
            route_tag=route_tag,
            boarding_duration=boarding_duration,
        )

    @staticmethod
    def parse_lines(lines: Iterable[str]) -> List[Passenger]:
        """Parse feed lines, skipping malformed ones, preserving order."""
        passengers = []
        for line in lines:
            passenger = FeedReader.parse_line(line)
            if passenger is not None:
                passengers.append(passenger)
        return passengers

    @staticmethod
    def load_feed(file_path: Union[str, Path]) -> List[Passenger]:
        """
        Load the passenger feed from a file.

        Args:
            file_path: Path to the feed file

        Returns:
            List of Passenger records in file order

        Raises:
            ParseError: If the file cannot be opened or read
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                passengers = FeedReader.parse_lines(f)
        except OSError as e:
            raise ParseError(f"Unable to open input file {file_path}: {e}") from e

        logger.info("Loaded %d passengers from %s", len(passengers), file_path)
        return passengers

    @staticmethod
    def load_feed_from_string(content: str) -> List[Passenger]:
        """
        Load the passenger feed from string content.

        Args:
            content: Feed content as string

        Returns:
            List of Passenger records in input order
        """
        return FeedReader.parse_lines(content.splitlines())

    @staticmethod
    def sorted_feed(passengers: Sequence[Passenger]) -> List[Passenger]:
        """Stable sort by arrival tick, keeping file order within a tick."""
        return sorted(passengers, key=lambda p: p.arrival_tick)

    @staticmethod
    def is_sorted(passengers: Sequence[Passenger]) -> bool:
        """True if arrival ticks never decrease."""
        return all(
            earlier.arrival_tick <= later.arrival_tick
            for earlier, later in zip(passengers, passengers[1:])
        )


class DataLoader:
    """Loads scenario files for simulation."""

    @staticmethod
    def load_scenario_yaml(file_path: Union[str, Path]) -> SimulationConfig:
        """
        Load scenario YAML file.

        Expected format:
        vehicle:
          capacity: 5
        simulation:
          max_ticks: 1000
          route_order: [S, L, C]
        random_seed: 42

        Args:
            file_path: Path to scenario YAML file

        Returns:
            SimulationConfig object

        Raises:
            ConfigError: If the file cannot be read or holds invalid values
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Unable to open scenario file {file_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e

        return DataLoader.config_from_dict(data or {})

    @staticmethod
    def config_from_dict(data: Dict) -> SimulationConfig:
        """
        Create SimulationConfig from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            SimulationConfig object

        Raises:
            ConfigError: If a section is not a mapping or a value is out of range
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Scenario must be a mapping, got {type(data).__name__}")

        vehicle = data.get('vehicle') or {}
        simulation = data.get('simulation') or {}
        for name, section in (('vehicle', vehicle), ('simulation', simulation)):
            if not isinstance(section, dict):
                raise ConfigError(f"{name} must be a mapping, got {section!r}")

        capacity = vehicle.get('capacity', SimulationConfig.capacity)
        max_ticks = simulation.get('max_ticks', SimulationConfig.max_ticks)

        if not isinstance(capacity, int) or capacity < 1:
            raise ConfigError(f"vehicle.capacity must be a positive integer, got {capacity!r}")
        if not isinstance(max_ticks, int) or max_ticks < 1:
            raise ConfigError(f"simulation.max_ticks must be a positive integer, got {max_ticks!r}")

        route_order = DEFAULT_ROUTE_ORDER
        if 'route_order' in simulation:
            route_order = DataLoader._parse_route_order(simulation['route_order'])

        return SimulationConfig(
            capacity=capacity,
            max_ticks=max_ticks,
            route_order=route_order,
            random_seed=data.get('random_seed'),
        )

    @staticmethod
    def _parse_route_order(values) -> tuple:
        """
        Parse a list of route tags (e.g. [S, L, C]).

        Every route must appear exactly once.
        """
        if not isinstance(values, (list, tuple)):
            raise ConfigError(f"route_order must be a list of route tags, got {values!r}")

        tags = []
        for value in values:
            tag = RouteTag.from_char(str(value))
            if tag is None:
                raise ConfigError(f"Unknown route tag in route_order: {value!r}")
            tags.append(tag)

        if sorted(t.value for t in tags) != sorted(t.value for t in RouteTag):
            raise ConfigError("route_order must list every route exactly once")

        return tuple(tags)

    @staticmethod
    def load_scenario_sweep_csv(file_path: Union[str, Path]) -> List[Dict]:
        """
        Load scenario sweep CSV for parameter variation.

        Expected format:
        scenario_name,capacity,max_ticks
        small_taxi,3,1000
        ...

        Args:
            file_path: Path to sweep CSV file

        Returns:
            List of scenario parameter dictionaries
        """
        scenarios = []

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                reader = csv.DictReader(f)

                for row in reader:
                    scenario = {'scenario_name': (row.get('scenario_name') or '').strip()}

                    for key, value in row.items():
                        if key == 'scenario_name' or value is None:
                            continue
                        value = value.strip()
                        try:
                            scenario[key] = int(value)
                        except ValueError:
                            scenario[key] = value

                    scenarios.append(scenario)
        except OSError as e:
            raise ConfigError(f"Unable to open sweep file {file_path}: {e}") from e

        return scenarios

    @staticmethod
    def config_from_sweep_row(base_config: SimulationConfig, row: Dict) -> SimulationConfig:
        """
        Create config from sweep row, overriding base config.

        Args:
            base_config: Base configuration
            row: Sweep row with override values

        Returns:
            New SimulationConfig with overrides
        """
        config_dict = {
            'vehicle': {'capacity': base_config.capacity},
            'simulation': {
                'max_ticks': base_config.max_ticks,
                'route_order': [tag.value for tag in base_config.route_order],
            },
            'random_seed': base_config.random_seed,
        }

        field_mapping = {
            'capacity': ('vehicle', 'capacity'),
            'max_ticks': ('simulation', 'max_ticks'),
        }

        for key, value in row.items():
            if key in field_mapping and value != '':
                section, name = field_mapping[key]
                config_dict[section][name] = value

        return DataLoader.config_from_dict(config_dict)
