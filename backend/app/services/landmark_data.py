"""경복궁 건물 폴리곤과 주요 문화재 메타데이터 (프로세스 시작 시 한 번 로드, 변경 금지)"""

from __future__ import annotations

from types import MappingProxyType

from ..schemas.landmarks import Footprint, LandmarkInfo

# 선언 순서가 곧 매칭 우선순위
FOOTPRINTS: tuple[Footprint, ...] = (
    Footprint(
        id="eungjidang",
        name="응지당",
        name_en="Eungjidang",
        northwest=(37.579595432157966, 126.97667876079947),
        southeast=(37.57955041200325, 126.9768287778653),
    ),
    Footprint(
        id="gyeongseongjeon",
        name="경성전",
        name_en="Gyeongseongjeon",
        northwest=(37.579534628470896, 126.97674670564773),
        southeast=(37.5793566949806, 126.97681185646736),
    ),
    Footprint(
        id="gangnyeongjeon",
        name="강녕전",
        name_en="Gangnyeongjeon",
        northwest=(37.57947608222901, 126.97684012187166),
        southeast=(37.57938156638848, 126.97729581968161),
    ),
    Footprint(
        id="heumgyeonggak",
        name="흠경각",
        name_en="Heumgyeonggak",
        northwest=(37.57972153988065, 126.97652022734192),
        southeast=(37.5796810316051, 126.97670420635653),
    ),
    Footprint(
        id="gyotaejeon",
        name="교태전",
        name_en="Gyotaejeon",
        northwest=(37.57989055382053, 126.97691358021297),
        southeast=(37.57982529770065, 126.97725323109862),
    ),
    Footprint(
        id="sajeongjeon",
        name="사정전",
        name_en="Sajeongjeon",
        northwest=(37.579045873149205, 126.97691950147181),
        southeast=(37.57898059787739, 126.97716009067494),
    ),
    Footprint(
        id="manchunjeon",
        name="만춘전",
        name_en="Manchunjeon",
        northwest=(37.579057211291925, 126.97731006930693),
        southeast=(37.57899192120716, 126.97747707237069),
    ),
    Footprint(
        id="geungjeongjeon",
        name="긍정전",
        name_en="Geungjeongjeon",
        northwest=(37.57881379918469, 126.97657428653042),
        southeast=(37.57796927076278, 126.9773613427869),
    ),
    Footprint(
        id="gyejodang",
        name="계조당",
        name_en="Gyejodang",
        northwest=(37.57794005256122, 126.97769814362223),
        southeast=(37.57773738094997, 126.97797556142645),
    ),
)

# 폴리곤 ID와 건물 메타데이터 ID는 별개의 네임스페이스 (없으면 그대로 사용)
FOOTPRINT_TO_LANDMARK = MappingProxyType(
    {
        "gyeongseongjeon": "gyeongseungjeon",
        "geungjeongjeon": "geunjeongjeon",
    }
)

LANDMARKS: tuple[LandmarkInfo, ...] = (
    LandmarkInfo(
        id="gyeonghoeru",
        name="경회루",
        name_en="Gyeonghoeru Pavilion",
        center=(37.5788, 126.9770),
        radius_m=50,
        description="경복궁의 대표적인 누각으로, 연못 위에 세워진 아름다운 건물입니다.",
        detailed_description=(
            "경회루는 조선 태종 12년(1412)에 창건되어 임진왜란 때 소실된 후 고종 4년(1867)에 중건된 2층 누각입니다. "
            "국왕이 신하들과 연회를 베풀거나 외국 사신을 접대하던 곳입니다."
        ),
        build_year="1412년 (태종 12년)",
        cultural_property="국보 제224호",
        features=("2층 누각", "연못 위 건물", "왕실 연회장"),
        images=("/image/gyeonghoeru1.jpg", "/image/gyeonghoeru2.jpg"),
    ),
    LandmarkInfo(
        id="geunjeongjeon",
        name="근정전",
        name_en="Geunjeongjeon Hall",
        center=(37.5796, 126.9770),
        radius_m=60,
        description="경복궁의 정전으로, 조선 왕조의 공식적인 국가 행사가 열리던 곳입니다.",
        detailed_description=(
            "근정전은 경복궁의 중심 건물로, 왕이 신하들의 조회를 받거나 국가의 중요한 행사를 치르던 정전입니다. "
            "현재의 건물은 고종 때 중건된 것입니다."
        ),
        build_year="1395년 (태조 4년)",
        cultural_property="국보 제223호",
        features=("정전", "왕의 집무실", "국가 행사장"),
        images=("/image/geunjeongjeon1.jpg", "/image/geunjeongjeon2.jpg"),
    ),
    LandmarkInfo(
        id="gyeongseungjeon",
        name="경성전",
        name_en="Gyeongseungjeon Hall",
        center=(37.5794, 126.9768),
        radius_m=40,
        description="왕이 일상적인 정무를 보던 편전 건물입니다.",
        detailed_description="경성전은 근정전 북쪽에 위치한 편전으로, 왕이 평상시 정무를 처리하던 공간입니다.",
        build_year="1395년 (태조 4년)",
        cultural_property="보물",
        features=("편전", "일상 정무", "실무 공간"),
        images=("/image/gyeongseungjeon1.jpg",),
    ),
    LandmarkInfo(
        id="sajeongjeon",
        name="사정전",
        name_en="Sajeongjeon Hall",
        center=(37.5801, 126.9770),
        radius_m=40,
        description="왕이 일상적인 정무를 보던 편전으로, 근정전보다 작고 실용적인 건물입니다.",
        detailed_description=(
            "사정전은 왕이 평상시 정무를 보던 편전으로, 근정전이 국가 행사를 위한 공간이라면 "
            "사정전은 일상적인 업무를 처리하던 실무 공간이었습니다."
        ),
        build_year="1395년 (태조 4년)",
        cultural_property="보물 제1759호",
        features=("편전", "일상 정무", "실무 공간"),
        images=("/image/sajeongjeon1.jpg",),
    ),
    LandmarkInfo(
        id="gangnyeongjeon",
        name="강녕전",
        name_en="Gangnyeongjeon Hall",
        center=(37.5804, 126.9775),
        radius_m=35,
        description="조선시대 왕의 침전으로 사용된 건물입니다.",
        detailed_description="강녕전은 왕이 거처하던 침전으로, 왕의 사적인 생활 공간이었습니다.",
        build_year="1395년 (태조 4년)",
        cultural_property="보물 제1760호",
        features=("왕의 침전", "사적 공간", "생활 공간"),
        images=("/image/gangnyeongjeon1.jpg",),
    ),
    LandmarkInfo(
        id="gyotaejeon",
        name="교태전",
        name_en="Gyotaejeon Hall",
        center=(37.5807, 126.9775),
        radius_m=35,
        description="조선시대 왕비의 침전으로 사용된 건물입니다.",
        detailed_description="교태전은 왕비가 거처하던 침전으로, 아름다운 꽃담으로도 유명합니다.",
        build_year="1395년 (태조 4년)",
        cultural_property="보물 제1761호",
        features=("왕비의 침전", "꽃담", "여성 공간"),
        images=("/image/gyotaejeon1.jpg",),
    ),
    LandmarkInfo(
        id="changdeokgung",
        name="창덕궁",
        name_en="Changdeokgung Palace",
        center=(37.5794, 126.9910),
        description="조선왕조의 이궁, 유네스코 세계문화유산입니다.",
        detailed_description=(
            "창덕궁은 1405년 태종에 의해 경복궁의 이궁으로 건립되었습니다. "
            "후원은 한국 전통 조경의 극치를 보여주며, 1997년 유네스코 세계문화유산으로 등재되었습니다."
        ),
        build_year="1405년 (태종 5년)",
        cultural_property="사적 제122호 (유네스코 세계문화유산)",
        features=("이궁", "후원", "유네스코 세계문화유산"),
        images=("/heritage/changdeokgung.jpg",),
    ),
    LandmarkInfo(
        id="deoksugung",
        name="덕수궁",
        name_en="Deoksugung Palace",
        center=(37.5658, 126.9751),
        description="대한제국의 황궁입니다.",
        detailed_description=(
            "덕수궁은 임진왜란 이후 선조가 거처하면서 궁궐이 되었고, 고종이 거처하며 대한제국의 황궁 역할을 했습니다."
        ),
        build_year="1593년 (선조 26년)",
        cultural_property="사적 제124호",
        features=("대한제국 황궁", "서양식 건물", "근대사의 현장"),
        images=("/heritage/deoksugung.jpg",),
    ),
    LandmarkInfo(
        id="changgyeonggung",
        name="창경궁",
        name_en="Changgyeonggung Palace",
        center=(37.5792, 126.9950),
        description="조선왕조의 이궁입니다.",
        detailed_description="창경궁은 1484년 성종이 세 대비를 모시기 위해 건립한 궁궐로, 창덕궁과 함께 동궐이라 불렸습니다.",
        build_year="1484년 (성종 15년)",
        cultural_property="사적 제123호",
        features=("이궁", "동궐", "왕실 생활공간"),
        images=("/heritage/changgyeonggung.jpg",),
    ),
    LandmarkInfo(
        id="jongmyo",
        name="종묘",
        name_en="Jongmyo Shrine",
        center=(37.5744, 126.9944),
        description="조선왕조 왕과 왕비의 신주를 모신 사당입니다.",
        detailed_description="종묘는 역대 왕과 왕비의 신주를 모신 유교 사당으로, 1995년 유네스코 세계문화유산으로 등재되었습니다.",
        build_year="1394년 (태조 3년)",
        cultural_property="사적 제125호 (유네스코 세계문화유산)",
        features=("왕실 사당", "종묘제례", "유네스코 세계문화유산"),
        images=("/heritage/jongmyo.jpg",),
    ),
    LandmarkInfo(
        id="namdaemun",
        name="숭례문 (남대문)",
        name_en="Sungnyemun Gate",
        center=(37.5597, 126.9756),
        description="서울 성곽의 정문입니다.",
        detailed_description="숭례문은 1396년에 축조된 한양 도성의 정문으로, 2008년 화재 이후 2013년 복원되었습니다.",
        build_year="1396년 (태조 5년)",
        cultural_property="국보 제1호",
        features=("서울 성곽", "정문", "국보 제1호"),
        images=("/heritage/namdaemun.jpg",),
    ),
    LandmarkInfo(
        id="dongdaemun",
        name="흥인지문 (동대문)",
        name_en="Heunginjimun Gate",
        center=(37.5711, 126.9946),
        description="서울 성곽의 동문입니다.",
        detailed_description="흥인지문은 1396년에 축조된 서울 성곽의 동문으로, 옹성이 설치된 독특한 구조를 가지고 있습니다.",
        build_year="1396년 (태조 5년)",
        cultural_property="보물 제1호",
        features=("서울 성곽", "동문", "옹성 구조"),
        images=("/heritage/dongdaemun.jpg",),
    ),
    LandmarkInfo(
        id="bulguksa",
        name="불국사",
        name_en="Bulguksa Temple",
        center=(35.7898, 129.3320),
        description="신라 불교 예술의 걸작입니다.",
        detailed_description="불국사는 751년에 창건된 사찰로, 1995년 석굴암과 함께 유네스코 세계문화유산으로 등재되었습니다.",
        build_year="751년 (경덕왕 10년)",
        cultural_property="사적 제502호 (유네스코 세계문화유산)",
        features=("신라 불교 예술", "다보탑", "석가탑"),
        images=("/heritage/bulguksa.jpg",),
    ),
    LandmarkInfo(
        id="seokguram",
        name="석굴암",
        name_en="Seokguram Grotto",
        center=(35.7948, 129.3469),
        description="신라 석굴 예술의 최고봉입니다.",
        detailed_description="석굴암은 751년에 창건된 석굴 사원으로, 건축과 조각이 결합된 신라 불교 예술의 걸작입니다.",
        build_year="751년 (경덕왕 10년)",
        cultural_property="국보 제24호 (유네스코 세계문화유산)",
        features=("석굴 사원", "본존불", "신라 조각 예술"),
        images=("/heritage/seokguram.jpg",),
    ),
    LandmarkInfo(
        id="haeinsa",
        name="해인사",
        name_en="Haeinsa Temple",
        center=(35.8014, 128.0981),
        description="팔만대장경을 보관한 사찰입니다.",
        detailed_description="해인사는 802년에 창건된 사찰로, 장경판전에 보관된 팔만대장경으로 유명합니다.",
        build_year="802년 (애장왕 3년)",
        cultural_property="유네스코 세계문화유산",
        features=("팔만대장경", "장경판전", "유네스코 세계문화유산"),
        images=("/heritage/haeinsa.jpg",),
    ),
    LandmarkInfo(
        id="gyeongbokgung",
        name="경복궁",
        name_en="Gyeongbokgung Palace",
        center=(37.5788, 126.9770),
        description="조선왕조 제일의 법궁입니다.",
        detailed_description=(
            "경복궁은 1395년 태조 이성계가 새로운 왕조의 법궁으로 지은 궁궐로, "
            "근정전, 경회루, 향원정 등 아름다운 건축물들이 조화를 이루고 있습니다."
        ),
        build_year="1395년 (태조 4년)",
        cultural_property="사적 제117호",
        features=("조선 법궁", "근정전", "경회루", "향원정"),
        images=("/heritage/gyeonghoeru.jpg",),
    ),
)

# 경복궁 대략적인 경계 (north, south, east, west)
PALACE_BOUNDS = MappingProxyType({"north": 37.5820, "south": 37.5760, "east": 126.9790, "west": 126.9750})
PALACE_ADDRESS = "서울특별시 종로구 사직로 161 (경복궁)"
