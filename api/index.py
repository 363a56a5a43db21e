from mangum import Mangum   # adapter for serverless

from checkip.app import app

# Vercel needs handler
handler = Mangum(app)
