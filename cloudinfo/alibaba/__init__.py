"""Mapping of Alibaba Cloud instance families and bandwidths to generic categories."""