"""Progress indicators: bar and spinner"""
