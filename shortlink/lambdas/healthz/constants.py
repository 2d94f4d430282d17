HEALTHY = 'ok'
