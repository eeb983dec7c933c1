import json

from omegaconf import OmegaConf


class Config:
    """
    Runtime configuration loaded from a YAML file with optional dot-list
    overrides (``"conversion.fallback_width=800"``).

    Args:
        args: Namespace-like object with ``cfg_path`` (path to the YAML file)
            and ``options`` (list of ``key=value`` override strings).
    """

    def __init__(self, args):
        self.args = args

        config = OmegaConf.load(self.args.cfg_path)
        overrides = self._build_opt_list(self.args.options)

        self.config = OmegaConf.merge(config, overrides)

    def _build_opt_list(self, opts):
        if not opts:
            return OmegaConf.create()

        for opt in opts:
            if not isinstance(opt, str) or "=" not in opt:
                raise ValueError(
                    f"Invalid option '{opt}', expected 'section.key=value'")
            key = opt.split("=", 1)[0]
            if not key or key.startswith(".") or key.endswith("."):
                raise ValueError(f"Invalid option key '{key}'")

        return OmegaConf.from_dotlist(list(opts))

    @property
    def conversion_cfg(self):
        return self.config.conversion

    @property
    def logging_cfg(self):
        return self.config.logging

    def to_dict(self):
        return OmegaConf.to_container(self.config, resolve=True)

    def pretty_print(self):
        return json.dumps(self.to_dict(), indent=4, sort_keys=True)

    def __str__(self):
        return OmegaConf.to_yaml(self.config)
