"""Application services: verification of signed auth tokens."""