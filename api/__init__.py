"""
HTTP surface of the workout session service.

- deps.py: providers that bind settings, Supabase and OpenAI to use cases
- routers/: health checks and the /workouts endpoints
"""
