import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError

DEFAULT_MANIFEST = "dsgen.toml"


@dataclass
class ComponentsConfig:
    """Where the header comes from and where descriptors go."""

    header: str | None = None  # Inline header value
    header_file: str | None = None  # File holding the header value
    catalog: str = "classes.toml"
    output: str = "build/generated"


@dataclass
class DiagnosticsConfig:
    """How diagnostics affect the exit status."""

    fail_on_warning: bool = False


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from dsgen.toml.

    Examples in dsgen.toml:

        [project]
        name = "acme-bundle"
        version = "1.0.0"

        [components]
        header = "com.acme.*;properties:=\\"region=eu\\""
        catalog = "classes.toml"
        output = "build/generated"

        [diagnostics]
        fail_on_warning = false
    """

    name: str
    version: str
    root: Path = field(default_factory=Path.cwd)
    components: ComponentsConfig = field(default_factory=ComponentsConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)

    @property
    def catalog_path(self) -> Path:
        return self.root / self.components.catalog

    @property
    def output_path(self) -> Path:
        return self.root / self.components.output

    def read_header(self) -> str:
        """
        Return the configured header value.

        Raises:
            ConfigError: If neither ``header`` nor ``header_file`` is set, or
                the header file cannot be read
        """
        if self.components.header is not None:
            return self.components.header
        if self.components.header_file is not None:
            path = self.root / self.components.header_file
            try:
                return path.read_text(encoding="utf-8").strip()
            except FileNotFoundError as e:
                raise ConfigError(f"Header file not found: {path}") from e
        raise ConfigError("No Service-Component header configured ([components] header)")


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Manifest not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid manifest {path}: {e}") from e

    project = data.get("project", {})
    components_data = data.get("components", {})
    diagnostics_data = data.get("diagnostics", {})

    components_config = ComponentsConfig(
        header=components_data.get("header"),
        header_file=components_data.get("header_file"),
        catalog=components_data.get("catalog", "classes.toml"),
        output=components_data.get("output", "build/generated"),
    )

    diagnostics_config = DiagnosticsConfig(
        fail_on_warning=diagnostics_data.get("fail_on_warning", False),
    )

    return ProjectManifest(
        name=project.get("name", "unnamed"),
        version=project.get("version", "0.0.0"),
        root=path.resolve().parent,
        components=components_config,
        diagnostics=diagnostics_config,
    )
