# scholarguard/dependencies/gateway.py

from fastapi import Depends

from scholarguard.utils.gateway import AnalysisGateway, GatewayConfig


def get_gateway_config() -> GatewayConfig:
    return GatewayConfig.from_settings()


def get_gateway(config: GatewayConfig = Depends(get_gateway_config)) -> AnalysisGateway:
    return AnalysisGateway(config)
