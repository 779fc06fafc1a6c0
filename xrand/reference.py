"""Fixed raw-index sample for reference mode.

Raw 32-bit values in [0, 2**32), already scaled to index form, so the
debiasing transform can be checked by hand against a known sequence.
The entry 4294967295 (2**32 - 1) lands in the rejection zone of every
width that does not divide 2**32.
"""

REFERENCE_SAMPLES: tuple[int, ...] = (
    3046254771, 1107936140, 2836218389, 472510277, 4012988102,
    1926484536, 690134952, 3571902011, 2214751380, 95021486,
    3329846724, 1557223960, 4294967295, 2701384469, 806327145,
    3890416632, 1348865077, 258904613, 2967551108, 1732007795,
    4156324089, 520773361, 3411097234, 2069315517, 1183942806,
    3752481950, 611830427, 2498760263, 3184022671, 1465390058,
    40682977, 2853410419, 3987615324, 1029746285, 2341598746,
    3618873531, 757211894, 1899054360, 4081539187, 2625993802,
    348720516, 3251146849, 1614078223, 2932460715, 910385642,
    3473905157, 2187641038, 134557861,
)
