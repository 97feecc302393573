from supplyapi.utils import *
import asyncio

logger = logging.getLogger(__name__)

async def handler(event, calculator, dead_letter_topic=None, region=DEFAULT_REGION):
    try:
        supply = await calculator.compute_circulating_supply()
        return {
            "statusCode": 200,
            "body": str(supply),
            "headers": headers
        }
    except ComputationError as e:
        logger.error(f"Failed to calculate new circulating supply: {e}")
        return await fallback(event, e, calculator.cache, dead_letter_topic, region)
    except Exception as e:
        logger.exception("Unexpected error calculating circulating supply")
        return await fallback(event, e, calculator.cache, dead_letter_topic, region)

async def fallback(event, e, cache, dead_letter_topic=None, region=DEFAULT_REGION):
    last_supply = cache.get()
    if last_supply is None:
        # dead letter publishing is blocking boto3 I/O, keep it off the event loop
        return await asyncio.to_thread(handle_error, event, e, 500, NO_SUPPLY_MESSAGE, dead_letter_topic, region)
    logger.info(f"Returning last known circulating supply: {last_supply}")
    return {
        "statusCode": 200,
        "body": str(last_supply),
        "headers": headers
    }
