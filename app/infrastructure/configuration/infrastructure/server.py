"""Server infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """HTTP server and process lifecycle configuration.

    Environment Variables:
        LISTEN_ADDRESS: Address to bind, ``host:port`` or ``:port`` (default: :4949)
        KEEP_ALIVE_TIMEOUT: Seconds an idle keep-alive connection is held open
            before the server closes it (default: 10)
        SHUTDOWN_GRACE_PERIOD: Seconds to wait for in-flight work on shutdown (default: 10)

    Example:
        ```python
        settings = get_settings()
        host, port = settings.server.host, settings.server.port
        ```
    """

    LISTEN_ADDRESS: str = Field(default=":4949", alias="LISTEN_ADDRESS")
    KEEP_ALIVE_TIMEOUT: int = Field(default=10, gt=0, alias="KEEP_ALIVE_TIMEOUT")
    SHUTDOWN_GRACE_PERIOD: int = Field(default=10, ge=0, alias="SHUTDOWN_GRACE_PERIOD")

    @property
    def host(self) -> str:
        """Host part of LISTEN_ADDRESS; an empty host binds all interfaces."""
        host, _, _ = self.LISTEN_ADDRESS.rpartition(":")
        return host.strip("[]") or "0.0.0.0"

    @property
    def port(self) -> int:
        """Port part of LISTEN_ADDRESS."""
        _, _, port = self.LISTEN_ADDRESS.rpartition(":")
        try:
            return int(port)
        except ValueError as e:
            raise ValueError(
                f"LISTEN_ADDRESS must end with a numeric port: {self.LISTEN_ADDRESS!r}"
            ) from e
