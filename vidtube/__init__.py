# vidtube
