"""Built-in sample catalog, used to seed an empty store and as the client's offline dataset."""

_UNSPLASH = (
    "https://images.unsplash.com/{photo}?ixlib=rb-4.0.3"
    "&ixid=M3wxMjA3fDB8MHxwaG90by1wYWdlfHx8fGVufDB8fHx8fA%3D%3D&auto=format&fit=crop&w=500&q=80"
)

SAMPLE_DOCUMENTARIES = [
    {
        "id": 1,
        "title": "Wilderness Untamed",
        "description": "Explore the last remaining wilderness areas on Earth and the challenges they face in the modern world.",
        "category": "nature",
        "image_url": _UNSPLASH.format(photo="photo-1441974231531-c6227db76b6e"),
        "video_url": "https://www.youtube.com/embed/7n7bw6luneo",
        "rating": 4.5,
        "downloads": 1247,
        "duration": "45 min",
        "date_added": "2023-05-15T00:00:00Z",
    },
    {
        "id": 2,
        "title": "Urban Echoes",
        "description": "A deep dive into the lives of city dwellers and how urbanization is reshaping human connections.",
        "category": "society",
        "image_url": _UNSPLASH.format(photo="photo-1518837695005-2083093ee35b"),
        "video_url": "https://www.youtube.com/embed/6v2L2UGZJAM",
        "rating": 4.2,
        "downloads": 892,
        "duration": "52 min",
        "date_added": "2023-04-22T00:00:00Z",
    },
    {
        "id": 3,
        "title": "Mountain Voices",
        "description": "Follow the lives of communities living in the world's highest mountain ranges and their unique cultures.",
        "category": "culture",
        "image_url": _UNSPLASH.format(photo="photo-1506905925346-21bda4d32df4"),
        "video_url": "https://www.youtube.com/embed/4kL2M20acuw",
        "rating": 4.8,
        "downloads": 1563,
        "duration": "38 min",
        "date_added": "2023-06-03T00:00:00Z",
    },
]

SAMPLE_COMMENTS = [
    {
        "id": 1,
        "author": "Sarah Johnson",
        "email": "sarah@example.com",
        "text": "Wilderness Untamed completely changed my perspective on conservation. The cinematography was breathtaking!",
        "status": "approved",
        "documentary_id": 1,
        "date_added": "2023-06-15T00:00:00Z",
    },
    {
        "id": 2,
        "author": "Michael Torres",
        "email": "michael@example.com",
        "text": "As an urban planner, Urban Echoes resonated deeply with me. Beautifully captures modern city life challenges.",
        "status": "approved",
        "documentary_id": 2,
        "date_added": "2023-05-28T00:00:00Z",
    },
]
