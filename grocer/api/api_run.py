from fastapi import FastAPI

from grocer.api.routes import shopping_list

# Initialize FastAPI app
app = FastAPI(title="Shopping List API")

# Include routers
app.include_router(shopping_list.router, tags=["shopping-list"])


@app.get("/health")
def health():
    return {"status": "ok"}
