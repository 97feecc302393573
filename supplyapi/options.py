from supplyapi.utils import headers

def handler(event):
    return {
        "statusCode": 200,
        "body": "",
        "headers": headers
    }
