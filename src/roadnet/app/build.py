# roadnet/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from roadnet.app.hooks import NoopHooks
from roadnet.app.server import RouteServer
from roadnet.config.models import ServerModel
from roadnet.domain.graph import RoadNetwork
from roadnet.domain.mechanics.mechanics_routers import NetworkRouter
from roadnet.io.server_logging import ServerLogging
from roadnet.runtime.registries import make_transport
from roadnet.runtime.resources import load_network_from_path


@dataclass
class App:
    config: ServerModel
    network: RoadNetwork
    router: NetworkRouter
    server: RouteServer

    def run(self) -> int:
        """Open the configured transport and serve until the input ends."""
        with make_transport(self.config.transport) as (instream, outstream):
            return self.server.serve(instream, outstream)


def build(
    cfg: ServerModel | Mapping,
    *,
    network: RoadNetwork | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ServerModel) else ServerModel.model_validate(cfg)

    # 1) Hooks first so graph loading is logged too
    hooks = (
        ServerLogging(name=model.name, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Shared read-only network
    if network is None:
        network = load_network_from_path(model.graph.file, model.graph.fmt)

    # 3) Router & request loop
    router = NetworkRouter(network)
    server = RouteServer(
        router,
        hooks=hooks,
        max_message_bytes=model.protocol.max_message_bytes,
        read_chunk_bytes=model.protocol.read_chunk_bytes,
        info={"vertices": network.graph.size(), "edges": network.graph.num_edges()},
    )
    return App(model, network, router, server)
