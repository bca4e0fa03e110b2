from __future__ import annotations

import tomllib as toml
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import Any

from sympy import isprime

from divquiz.sampling import WeightedSampler
from divquiz.utility import ConfigError, UserInputError
from divquiz.workspace import workspace_dir


def _is_int(v: object) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


@dataclass(frozen=True)
class DifficultyConfig:
    """
    One difficulty level for the target generator.

      max_prime_factors:      hard cap on primes multiplied into a target
      prime_weights:          {prime: weight}; heavier primes are drawn more often
      stop_probability_table: ((probability, upper_bound_exclusive), ...), first
                              row with product < bound decides the chance to stop
      max_value:              ceiling for the accumulated product

    Validated on construction; an invalid config never exists.
    """
    name: str
    max_prime_factors: int
    prime_weights: Mapping[int, int]
    stop_probability_table: tuple[tuple[float, int], ...]
    max_value: int
    description: str = "(no description)"
    _source: Path | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        weights = dict(self.prime_weights or {})
        try:
            table = tuple((float(p), bound) for p, bound in (self.stop_probability_table or ()))
        except (TypeError, ValueError):
            raise ConfigError(
                f"difficulty '{self.name}': stop_probability_table rows must be (probability, upper_bound)."
            ) from None
        object.__setattr__(self, "prime_weights", MappingProxyType(weights))
        object.__setattr__(self, "stop_probability_table", table)
        self._validate()

    def _validate(self) -> None:
        where = f"difficulty '{self.name}'"
        if not _is_int(self.max_prime_factors) or self.max_prime_factors < 1:
            raise ConfigError(f"{where}: max_prime_factors must be an integer >= 1, got {self.max_prime_factors!r}.")
        if not _is_int(self.max_value) or self.max_value < 1:
            raise ConfigError(f"{where}: max_value must be a positive integer, got {self.max_value!r}.")
        if not self.prime_weights:
            raise ConfigError(f"{where}: prime_weights is empty.")
        for p, w in self.prime_weights.items():
            if not isinstance(p, int) or not isprime(p):
                raise ConfigError(f"{where}: {p!r} in prime_weights is not a prime.")
            if not _is_int(w) or w <= 0:
                raise ConfigError(f"{where}: weight for prime {p} must be a positive integer, got {w!r}.")
        for prob, bound in self.stop_probability_table:
            if not 0.0 <= prob <= 1.0:
                raise ConfigError(f"{where}: stop probability {prob} is outside [0, 1].")
            if not _is_int(bound):
                raise ConfigError(f"{where}: stop bound {bound!r} must be an integer.")
        lo, hi = self.min_prime, max(self.prime_weights)
        if lo * hi > self.max_value:
            raise ConfigError(
                f"{where}: smallest × largest prime ({lo} × {hi} = {lo * hi}) "
                f"exceeds max_value {self.max_value}."
            )

    def __hash__(self) -> int:
        return hash((
            self.name,
            self.max_prime_factors,
            tuple(sorted(self.prime_weights.items())),
            self.stop_probability_table,
            self.max_value,
            self.description,
        ))

    @property
    def min_prime(self) -> int:
        return min(self.prime_weights)

    @cached_property
    def sampler(self) -> WeightedSampler:
        return WeightedSampler(self.prime_weights)

    def stop_probability(self, product: int) -> float:
        """Chance to stop accumulating at this product; 1.0 past the last bound."""
        for prob, bound in self.stop_probability_table:
            if product < bound:
                return prob
        return 1.0

    def as_dict(self) -> dict[str, Any]:
        return {
            "PROFILE": {"name": self.name, "description": self.description},
            "GENERATION": {
                "MAX_PRIME_FACTORS": self.max_prime_factors,
                "MAX_VALUE": self.max_value,
                "PRIME_WEIGHTS": {str(p): w for p, w in self.prime_weights.items()},
                "STOP_PROBABILITIES": [list(row) for row in self.stop_probability_table],
            },
        }


# --- Presets ---------------------------------------------------------------
# Small primes carry the most weight so most targets stay easy to factor.

BEGINNER = DifficultyConfig(
    name="beginner",
    description="Products of two small primes, up to 50",
    max_prime_factors=2,
    prime_weights={2: 40, 3: 30, 5: 20, 7: 10},
    stop_probability_table=((0.6, 20), (0.9, 40)),
    max_value=50,
)

INTERMEDIATE = DifficultyConfig(
    name="intermediate",
    description="Up to three prime factors, targets up to 120",
    max_prime_factors=3,
    prime_weights={2: 30, 3: 25, 5: 20, 7: 15, 11: 10},
    stop_probability_table=((0.3, 20), (0.6, 60), (0.9, 100)),
    max_value=120,
)

ADVANCED = DifficultyConfig(
    name="advanced",
    description="Up to four prime factors including 13 and 17, targets up to 400",
    max_prime_factors=4,
    prime_weights={2: 25, 3: 20, 5: 18, 7: 15, 11: 10, 13: 7, 17: 5},
    stop_probability_table=((0.1, 30), (0.4, 100), (0.7, 200), (0.9, 400)),
    max_value=400,
)

PRESETS: Mapping[str, DifficultyConfig] = MappingProxyType({
    c.name: c for c in (BEGINNER, INTERMEDIATE, ADVANCED)
})

DEFAULT_PROFILE = BEGINNER.name


def _preset_key(name: str) -> str | None:
    """Preset names match case- and whitespace-insensitively."""
    key = (name or "").strip().lower()
    return key if key in PRESETS else None


def get_preset(name: str) -> DifficultyConfig:
    try:
        return PRESETS[_preset_key(name)]
    except KeyError:
        raise UserInputError(
            f"Unknown difficulty '{name}'. Presets: {', '.join(PRESETS)}."
        ) from None


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except Exception as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise ConfigError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _parse_weights(raw: Any, where: str) -> dict[int, int]:
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: PRIME_WEIGHTS must be a table like {{ \"2\" = 10 }}.")
    out: dict[int, int] = {}
    for k, v in raw.items():
        try:
            out[int(k)] = v
        except ValueError:
            raise ConfigError(f"{where}: PRIME_WEIGHTS key {k!r} is not an integer.") from None
    return out


def _parse_stop_table(raw: Any, where: str) -> tuple[tuple[float, int], ...]:
    _ROW = 2
    if not isinstance(raw, list):
        raise ConfigError(f"{where}: STOP_PROBABILITIES must be an array of [probability, upper_bound].")
    rows = []
    for row in raw:
        if not isinstance(row, list | tuple) or len(row) != _ROW:
            raise ConfigError(f"{where}: bad STOP_PROBABILITIES row {row!r}.")
        rows.append((row[0], row[1]))
    return tuple(rows)


def config_from_dict(raw: dict[str, Any], fallback_name: str, source: Path | None = None) -> DifficultyConfig:
    """
    Build a DifficultyConfig from the profile TOML layout:

      [PROFILE]
      name = "challenge"
      description = "..."

      [GENERATION]
      MAX_PRIME_FACTORS = 4
      MAX_VALUE = 600
      PRIME_WEIGHTS = { "2" = 20, "3" = 15 }
      STOP_PROBABILITIES = [[0.2, 60], [0.8, 300]]
    """
    meta = raw.get("PROFILE") or {}
    gen = raw.get("GENERATION") or {}
    if not isinstance(meta, dict):
        raise ConfigError(f"profile '{fallback_name}': [PROFILE] must be a table.")
    name = str(meta.get("name") or fallback_name)
    where = f"profile '{name}'"
    if not isinstance(gen, dict) or not gen:
        raise ConfigError(f"{where}: missing [GENERATION] section.")

    missing = [k for k in ("MAX_PRIME_FACTORS", "MAX_VALUE", "PRIME_WEIGHTS") if k not in gen]
    if missing:
        raise ConfigError(f"{where}: [GENERATION] lacks {', '.join(missing)}.")

    return DifficultyConfig(
        name=name,
        description=_sanitize_oneline(str(meta.get("description") or "")),
        max_prime_factors=gen["MAX_PRIME_FACTORS"],
        prime_weights=_parse_weights(gen["PRIME_WEIGHTS"], where),
        stop_probability_table=_parse_stop_table(gen.get("STOP_PROBABILITIES", []), where),
        max_value=gen["MAX_VALUE"],
        _source=source,
    )


# --- Public API ------------------------------------------------------------


def list_all_profiles() -> list[str]:
    """Preset names first, then workspace profiles (filename stems)."""
    names = list(PRESETS)
    pdir = _profiles_dir()
    if pdir.exists():
        names += sorted(p.stem for p in pdir.glob("*.toml") if p.stem not in PRESETS)
    return names


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """
    Return [(name, description), ...] for presets and workspace profiles.
    Unreadable profiles are listed with the parse error as description.
    """
    items = [(c.name, c.description) for c in PRESETS.values()]
    pdir = _profiles_dir()
    if not pdir.exists():
        return items
    for p in sorted(pdir.glob("*.toml")):
        if p.stem in PRESETS:
            continue
        try:
            cfg = config_from_dict(_load_toml(p), p.stem, p)
            items.append((p.stem, cfg.description))
        except UserInputError as e:
            items.append((p.stem, f"(invalid: {e})"))
    return items


def has_profile(name: str) -> bool:
    return _preset_key(name) is not None or _profile_path(name).exists()


def load_config(name: str | None) -> DifficultyConfig:
    """
    Resolve a profile name (default 'beginner'): built-in presets win,
    otherwise <workspace>/profiles/<name>.toml is read and validated.
    """
    if not name:
        name = DEFAULT_PROFILE
    key = _preset_key(name)
    if key is not None:
        return PRESETS[key]

    path = _profile_path(name)
    if not path.exists():
        raise UserInputError(f"Profile '{name}' not found (looked in presets and {path.parent}).")
    return config_from_dict(_load_toml(path), path.stem, path)


def _current_profile_path() -> Path:
    p = _profiles_dir()
    try:
        p.mkdir(parents=True, exist_ok=True)
    except Exception:
        pass
    return p / ".current"


def read_current_profile() -> str | None:
    try:
        s = _current_profile_path().read_text(encoding="utf-8").strip()
        return s[:-5] if s.lower().endswith(".toml") else (s or None)
    except Exception:
        return None


def write_current_profile(name: str) -> None:
    nm = (name or "").strip()
    if nm.lower().endswith(".toml"):
        nm = nm[:-5]
    _current_profile_path().write_text(nm, encoding="utf-8")
