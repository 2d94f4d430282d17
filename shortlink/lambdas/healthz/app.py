from shortlink.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlink.lambdas.healthz.constants import HEALTHY


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Liveness probe: always `200 ok`, touches no store"""
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'text/plain; charset=utf-8'},
        'body': HEALTHY,
    }
