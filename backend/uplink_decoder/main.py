from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from uplink_decoder.config import CORS_ORIGINS, configure_logging
from uplink_decoder.routers import uplink

configure_logging()

app = FastAPI(title="DHT22 uplink decoder")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(uplink.router)


@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("uplink_decoder.main:app", host="0.0.0.0", port=8000, reload=True)
