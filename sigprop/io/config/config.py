""" Configuration handler module
The configuration is read from the json file and validated by the jsonschema tool.

The default jsonschema file is stored in the ./resources folder
"""
import json
from jsonschema import validate, ValidationError

from sigprop import PROJECT_PATH
from sigprop.errors import ConfigError
from sigprop.common_log import get_logger, set_logs, IO_LOG
from .enums import ConvergenceAlgorithm

__all__ = ["Config", "config_dict"]

SCHEMA_PATH = PROJECT_PATH / "io/config/resources/signal_schema.json"


class Config(dict):
    """
    Configuration class that inherits from :py:class:`dict`.

    The configuration handler is initialized from the configuration json file. The :py:mod:`jsonschema` module is
        used for validating the json content against `resources/signal_schema.json`.

    The handler can be built for local use, or the module-level `config_dict` instance can be initialized once and
        imported everywhere as a global variable.
        Examples:
            >>> from sigprop.io.config import config_dict
            >>> config_filename = "path/to/config/file.json"
            >>> try:
            >>>     with open(config_filename) as json_file:
            >>>         data = json.load(json_file)
            >>>         config_dict.init(data)
            >>>     except Exception as e:
            >>>         print(f"Error Reading Configuration File.")
    """

    def init(self, initial_dict):
        """
        Initializes the configuration handler instance.

        Args:
            initial_dict(dict): a dict instance with the content of the loaded json file. See :py:meth:`json.load`.

        Raises:
            ConfigError: when the initialization of the configuration handler fails, a ConfigError is raised
        """
        # validate config file
        self._validate(initial_dict)

        # Update the dictionary with the values from initial_dict
        self.clear()
        self.update(initial_dict)

        if "log" in self:
            set_logs(self.get("log", "level", fallback="INFO"), self.get("log", "file", fallback=""))

        log = get_logger(IO_LOG)
        section = self.get("signal_propagation", fallback={})
        for key, value in section.items():
            log.info(f"Setting signal propagation parameter '{key}' to {value}")
        return self

    @classmethod
    def from_file(cls, path):
        """
        Builds a validated configuration from a json file.

        Args:
            path(str or pathlib.Path): path to the json configuration file
        Returns:
            Config: the initialized configuration
        Raises:
            ConfigError: if the file cannot be read or does not follow the schema
        """
        try:
            with open(path) as json_file:
                data = json.load(json_file)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Error reading config file {path}: {e}")
        return cls().init(data)

    @staticmethod
    def _validate(initial_dict):
        # Read the schema from the file
        with open(SCHEMA_PATH) as schema_file:
            schema = json.load(schema_file)

        try:
            validate(initial_dict, schema)
        except ValidationError as e:
            raise ConfigError(f"Error validating config file: {e.message}")

    def get(self, *keys, fallback=ConfigError):
        """
        Retrieve a value in the config, if the value is not available,
        give the fallback value specified.

        Args:
            keys: list of cascaded keys for the request configuration field
            fallback: fallback in case the list of keys is not found.
        Raises:
            ConfigError: if the fallback is the `ConfigError` exception, it is raised

        Examples:
            >>> config.get("signal_propagation", "max_iterations", fallback=50)
            This will attempt to return the field {"signal_propagation":{"max_iterations":field}}, with a
            fallback of 50
        """

        full_keys = list(keys).copy()
        key = None

        section, *keys = keys
        out = super().get(section, fallback)

        while isinstance(out, dict) and keys:
            key = keys.pop(0)
            out = out.get(key, fallback)

        if keys and out is not fallback:
            raise ConfigError(
                "Dict structure mismatch : Looked for '{}', stopped at '{}'".format(
                    ".".join(full_keys), key
                )
            )

        if out is ConfigError:
            raise ConfigError(
                "Invalid dict structure: Could not find {} in config".format(".".join(full_keys))
            )

        return out

    def set(self, *args):
        """ Set a value in the config dictionary

        The last argument is the value to set.

        Examples:
            >>> config.set('signal_propagation', 'algorithm', 'newton')
            will set the field {"signal_propagation":{"algorithm":"newton"}}
        """

        # split arguments in keys and value
        *first_keys, last_key, value = args

        subdict = self
        for k in first_keys:
            subdict.setdefault(k, {})
            subdict = subdict[k]

        subdict[last_key] = value

    def get_algorithm(self):
        """
        Returns:
            ConvergenceAlgorithm: the configured light-time iteration scheme (NEWTON when absent)
        """
        return ConvergenceAlgorithm.init_model(self.get("signal_propagation", "algorithm", fallback="newton"))


config_dict = Config()
