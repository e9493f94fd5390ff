from fastapi import APIRouter

# Create a default router for api landing page
DefaultRouter = APIRouter()


@DefaultRouter.get("/")
async def hello_world():
    return "Welcome to the Parcel Broker Service"
