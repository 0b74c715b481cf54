from fastapi import FastAPI
from app.api.routes import delivery_estimates, technicians, work_schedules

app = FastAPI(title="ServicePilot API", version="0.1.0")

app.include_router(delivery_estimates.router, prefix="/api/v1")
app.include_router(technicians.router, prefix="/api/v1")
app.include_router(work_schedules.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
