# globally used stuff goes here

import json
import logging
import os

import boto3
import web3
Web3 = web3.Web3
AsyncWeb3 = web3.AsyncWeb3

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PROVIDER_URL = "https://eth-mainnet.g.alchemy.com/v2/{}"
DEFAULT_REGION = "us-west-2"

# names understood by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# balances held here are not circulating
LOCKED_ADDRESSES = [
    "0x7eaB1c8a3E722fe477e28C7CDc7F954A54Ea3213",
    "0x05b2607d070f9206eb595c0596fd78748751a8e7",
]

NO_SUPPLY_MESSAGE = "Error calculating circulating supply and no previous value available"

ABI_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "abi")

class ConfigurationError(Exception):
    pass

class ProviderError(Exception):
    pass

class ComputationError(Exception):
    pass

def read_json_file(filename):
    with open(filename) as f:
        return json.loads(f.read())

erc20Json = read_json_file(os.path.join(ABI_DIR, "ERC20.json"))

def setup_logging(level="INFO"):
    logging.basicConfig(format=LOG_FORMAT, level=level.upper())

def get_config(environ=None):
    """Reads the service configuration from the environment.

    Raises ConfigurationError when a required value is missing or malformed.
    """
    if environ is None:
        environ = os.environ

    token_address = environ.get("TOKEN_ADDRESS", "").strip()
    if not token_address:
        raise ConfigurationError("TOKEN_ADDRESS is not set")
    if not Web3.is_address(token_address):
        raise ConfigurationError("TOKEN_ADDRESS '{}' is not a valid address".format(token_address))

    alchemy_key = environ.get("ALCHEMY_KEY", "").strip()
    if not alchemy_key:
        raise ConfigurationError("ALCHEMY_KEY is not set")

    port = environ.get("PORT") or DEFAULT_PORT
    try:
        port = int(port)
    except ValueError:
        raise ConfigurationError("invalid PORT '{}'".format(port))

    provider_url = environ.get("PROVIDER_URL") or DEFAULT_PROVIDER_URL
    try:
        provider_url = provider_url.format(alchemy_key)
    except (KeyError, IndexError, ValueError):
        raise ConfigurationError("invalid PROVIDER_URL '{}', expected a single {{}} slot for the key".format(provider_url))

    log_level = (environ.get("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError("invalid LOG_LEVEL '{}'".format(log_level))

    return {
        "host": environ.get("HOST") or DEFAULT_HOST,
        "port": port,
        "token_address": token_address,
        "provider_url": provider_url,
        "log_level": log_level,
        "dead_letter_topic": environ.get("DEAD_LETTER_TOPIC") or None,
        "aws_region": environ.get("AWS_REGION") or DEFAULT_REGION,
    }

sns_clients = {}

# clients are built once per region and reused across threads
def get_sns_client(region=DEFAULT_REGION):
    if region not in sns_clients:
        sns_clients[region] = boto3.client("sns", region_name=region)
    return sns_clients[region]

def sns_publish(topic, message, region=DEFAULT_REGION):
    sns_client = get_sns_client(region)
    sns_client.publish(
        TopicArn=topic,
        Message=message
    )

def stringify_error(e):
    traceback = e.__traceback__
    s = str(e)
    while traceback:
        s = "{}\n{}: {}".format(s, traceback.tb_frame.f_code.co_filename, traceback.tb_lineno)
        traceback = traceback.tb_next
    if e.__cause__ is not None:
        s = "{}\ncaused by: {}".format(s, stringify_error(e.__cause__))
    return s

def handle_error(event, e, statusCode, message, dead_letter_topic=None, region=DEFAULT_REGION):
    logger.error("request to %s failed with %s: %s", event.get("resource", "/"), statusCode, e)
    if dead_letter_topic:
        resource = event["resource"] if "resource" in event else ".unknown()"
        queryStringParameters = event["queryStringParameters"] if "queryStringParameters" in event else ""
        sns_message = "The following {} error occurred in circulating supply{}:\n{}\n{}".format(statusCode, resource, queryStringParameters, stringify_error(e))
        try:
            sns_publish(dead_letter_topic, sns_message, region)
        except Exception as publish_error:
            logger.warning("could not publish to dead letter topic %s: %s", dead_letter_topic, publish_error)
    return {
        "statusCode": statusCode,
        "body": message,
        "headers": headers
    }

headers = {
    "Content-Type": "text/plain",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "OPTIONS,GET"
}
