BASE_LOGGERNAME = "assessor"
