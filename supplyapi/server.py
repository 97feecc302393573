"""
HTTP entry point: serves the circulating supply as plain text on GET /.

Env: TOKEN_ADDRESS, ALCHEMY_KEY (required), PORT (default 3000), HOST,
PROVIDER_URL, LOG_LEVEL, DEAD_LETTER_TOPIC, AWS_REGION.

ALCHEMY_KEY takes the place of ETHERSCAN_API_KEY used by earlier deployments: reads
go through Alchemy JSON-RPC (PROVIDER_URL template) instead of Etherscan.
"""

import sys

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from supplyapi import get, options
from supplyapi.chain_reader import ChainReader
from supplyapi.supply_calculator import SupplyCalculator
from supplyapi.utils import *

logger = logging.getLogger(__name__)


def to_event(request: Request) -> dict:
    return {
        "resource": request.url.path,
        "queryStringParameters": dict(request.query_params) or None,
    }


def to_response(result: dict) -> PlainTextResponse:
    return PlainTextResponse(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
    )


def create_app(calculator: SupplyCalculator, cfg: dict | None = None) -> FastAPI:
    """Build the app around one calculator; its cache lives as long as the app."""
    cfg = cfg or {}
    app = FastAPI(redirect_slashes=False)
    app.state.calculator = calculator
    app.state.dead_letter_topic = cfg.get("dead_letter_topic")
    app.state.aws_region = cfg.get("aws_region", DEFAULT_REGION)

    @app.get("/", response_class=PlainTextResponse)
    async def circulating_supply(request: Request):
        result = await get.handler(
            to_event(request),
            request.app.state.calculator,
            request.app.state.dead_letter_topic,
            request.app.state.aws_region,
        )
        return to_response(result)

    @app.options("/", response_class=PlainTextResponse)
    async def preflight(request: Request):
        return to_response(options.handler(to_event(request)))

    return app


def main() -> None:
    load_dotenv()
    try:
        cfg = get_config()
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    setup_logging(cfg["log_level"])

    calculator = SupplyCalculator(ChainReader.from_config(cfg))
    app = create_app(calculator, cfg)

    logger.info(f"Server running at http://{cfg['host']}:{cfg['port']}")
    uvicorn.run(app, host=cfg["host"], port=cfg["port"], log_level=cfg["log_level"].lower())


if __name__ == "__main__":
    main()
