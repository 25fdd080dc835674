"""Clients for push messaging, task queues, object storage and the Kakao user API."""