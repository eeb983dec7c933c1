class Registry:
    mapping = {
        "handler": {},
        "state": {},
        "paths": {},
    }

    @classmethod
    def register_handler(cls, name):
        r"""Register a format handler to registry with key 'name'

        Args:
            name: Target format tag the handler is responsible for
                (e.g. "png", "svg").

        Usage:

            from pyimgconv.common.registry import registry

            @registry.register_handler("png")
            class PngHandler(RasterHandler):
                ...
        """
        def wrap(handler_cls):
            from pyimgconv.converter.base import IFormatHandler

            assert issubclass(handler_cls, IFormatHandler), (
                "All handlers must inherit 'IFormatHandler' class"
            )

            if name in cls.mapping["handler"]:
                raise KeyError(
                    "Name '{}' already registered for {}.".format(
                        name, cls.mapping["handler"][name]
                    )
                )
            cls.mapping["handler"][name] = handler_cls
            return handler_cls

        return wrap

    @classmethod
    def register_path(cls, name, path):
        r"""Register a path to registry with key 'name'

        Args:
            name: Key with which the path will be registered.

        Usage:

            from pyimgconv.common.registry import registry
        """
        assert isinstance(path, str), "All path must be str."
        if name in cls.mapping["paths"]:
            raise KeyError("Name '{}' already registered.".format(name))
        cls.mapping["paths"][name] = path

    @classmethod
    def register(cls, name, obj):
        r"""Register an item to registry with key 'name'

        Args:
            name: Key with which the item will be registered.

        Usage::

            from pyimgconv.common.registry import registry

            registry.register("config", {})
        """
        path = name.split(".")
        current = cls.mapping["state"]

        for part in path[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[path[-1]] = obj

    # handler
    @classmethod
    def get_handler_class(cls, name):
        return cls.mapping["handler"].get(name, None)

    @classmethod
    def list_handler(cls):
        return sorted(cls.mapping["handler"].keys())

    # path
    @classmethod
    def get_path(cls, name):
        return cls.mapping["paths"].get(name, None)

    @classmethod
    def list_path(cls):
        return sorted(cls.mapping["paths"].keys())

    @classmethod
    def get(cls, name, default=None):
        r"""Get an item from registry with key 'name'

        Args:
            name (string): Dotted key whose value needs to be retrieved.
            default: Returned when the key is not in the registry. Default: None
        """
        value = cls.mapping["state"]

        for subname in name.split("."):
            if not isinstance(value, dict) or subname not in value:
                return default
            value = value[subname]
        return value

    @classmethod
    def unregister(cls, name):
        r"""Remove an item from registry with key 'name'

        Args:
            name: Key which needs to be removed.
        Usage::

            from pyimgconv.common.registry import registry

            config = registry.unregister("config")
        """
        return cls.mapping["state"].pop(name, None)


registry = Registry()
