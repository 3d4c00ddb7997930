from omegaconf import DictConfig, OmegaConf

from metadata_manager.common.serializable import YAMLSerializable


class Factory:
    """
    Factory class for creating a registered serializable object by name.
    """

    @staticmethod
    def create(name: str, config: DictConfig):
        """
        Create an instance of a registered class from its configuration.
        """
        class_ = YAMLSerializable.get_by_name(name)
        return class_.from_config(config)

    @staticmethod
    def load(file_path):
        """
        Create an instance from a YAML file whose ``type`` field names the class.
        """
        config = OmegaConf.load(file_path)
        name = config.get("type")
        if not isinstance(name, str):
            raise ValueError(f"'{file_path}' must name a registered class in its 'type' field")
        return Factory.create(name, config)
