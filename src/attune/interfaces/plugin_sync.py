"""Port for synchronizing agent plugins before a run."""

import abc


class PluginSync(abc.ABC):
    """Contract for fetching plugins and fact plugins from the authority."""

    @abc.abstractmethod
    def download_plugins(self) -> list[str]:
        """Synchronize plugins.

        Returns:
            list[str]: Names of the files that were added or updated.
        """

    @abc.abstractmethod
    def download_fact_plugins(self) -> list[str]:
        """Synchronize fact plugins.

        Returns:
            list[str]: Names of the files that were added or updated.
        """
